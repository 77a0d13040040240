"""Factory for creating product stores from settings."""

from typing import TYPE_CHECKING

from ..logging import get_logger
from .base import ProductStore
from .implementations.memory import InMemoryProductStore

if TYPE_CHECKING:
    from ..config import Settings

logger = get_logger(__name__)

STORE_BACKENDS = ("couchbase", "memory")


async def create_product_store(settings: "Settings") -> ProductStore:
    """Create and connect the product store described by ``settings``.

    Raises:
        ValueError: If ``settings.store_backend`` is unknown
    """
    backend = settings.store_backend.lower()
    config = settings.collection_config()

    if backend == "memory":
        logger.info("Using in-memory product store")
        return InMemoryProductStore(config)
    elif backend == "couchbase":
        from .implementations.couchbase import CouchbaseProductStore, connect_cluster

        cluster = await connect_cluster(
            settings.couchbase_connection_string,
            settings.couchbase_username,
            settings.couchbase_password,
            config_profile=settings.couchbase_config_profile,
            timeout=settings.couchbase_connect_timeout,
        )
        logger.info(
            "Using Couchbase product store",
            bucket=config.bucket,
            scope=config.scope,
            collection=config.collection,
            search_index=config.search_index,
        )
        return CouchbaseProductStore(cluster, config)
    else:
        raise ValueError(
            f"Unknown store backend: {settings.store_backend} "
            f"(expected one of {', '.join(STORE_BACKENDS)})"
        )
