"""Couchbase product store over the async (acouchbase) SDK."""

from datetime import timedelta
from typing import Any

import couchbase.subdocument as SD
from acouchbase.cluster import Cluster
from couchbase.auth import PasswordAuthenticator
from couchbase.exceptions import (
    CouchbaseException,
    DocumentExistsException,
    DocumentNotFoundException,
    PathNotFoundException,
)
from couchbase.options import ClusterOptions, SearchOptions
from couchbase.search import MatchQuery

from ...logging import get_logger
from ..base import (
    CollectionConfig,
    ProductAlreadyExistsError,
    ProductDocument,
    ProductNotFoundError,
    ProductStore,
    ProductStoreError,
)

logger = get_logger(__name__)


async def connect_cluster(
    connection_string: str,
    username: str,
    password: str,
    config_profile: str | None = "wan_development",
    timeout: int = 10,
) -> Cluster:
    """Open a cluster connection and wait until it can serve requests."""
    options = ClusterOptions(PasswordAuthenticator(username, password))
    if config_profile:
        options.apply_profile(config_profile)

    logger.info(
        "Connecting to Couchbase",
        connection_string=connection_string,
        config_profile=config_profile or None,
    )
    cluster = await Cluster.connect(connection_string, options)
    await cluster.wait_until_ready(timedelta(seconds=timeout))
    logger.info("Couchbase cluster ready", connection_string=connection_string)
    return cluster


class CouchbaseProductStore(ProductStore):
    """Product documents in a bucket/scope/collection, searched via a Search index."""

    def __init__(self, cluster: Any, config: CollectionConfig | None = None):
        super().__init__(config)
        self.cluster = cluster

    def _collection(self) -> Any:
        return (
            self.cluster.bucket(self.config.bucket)
            .scope(self.config.scope)
            .collection(self.config.collection)
        )

    def _translate(self, operation: str, key: str | None, error: Exception) -> ProductStoreError:
        logger.error(
            "Couchbase operation failed",
            operation=operation,
            key=key,
            error_type=type(error).__name__,
            error=str(error),
        )
        if isinstance(error, DocumentNotFoundException | PathNotFoundException):
            return ProductNotFoundError(str(error), key=key)
        if isinstance(error, DocumentExistsException):
            return ProductAlreadyExistsError(str(error), key=key)
        return ProductStoreError(str(error), key=key)

    async def get(self, key: str) -> ProductDocument:
        try:
            result = await self._collection().get(key)
        except CouchbaseException as e:
            raise self._translate("get", key, e) from e
        return result.content_as[dict]

    async def insert(self, key: str, document: ProductDocument) -> None:
        try:
            await self._collection().insert(key, document)
        except CouchbaseException as e:
            raise self._translate("insert", key, e) from e

    async def replace(self, key: str, document: ProductDocument) -> None:
        try:
            await self._collection().replace(key, document)
        except CouchbaseException as e:
            raise self._translate("replace", key, e) from e

    async def delete(self, key: str) -> None:
        try:
            await self._collection().remove(key)
        except CouchbaseException as e:
            raise self._translate("remove", key, e) from e

    async def set_quantity(self, key: str, quantity: int | None) -> None:
        try:
            await self._collection().mutate_in(key, (SD.replace("quantity", quantity),))
        except CouchbaseException as e:
            raise self._translate("mutate_in", key, e) from e

    async def search(self, term: str, limit: int | None = None) -> list[str]:
        if limit is None:
            limit = self.config.search_limit
        if limit <= 0:
            return []
        try:
            result = self.cluster.search_query(
                self.config.search_index,
                MatchQuery(term),
                SearchOptions(limit=limit),
            )
            return [row.id async for row in result.rows()]
        except CouchbaseException as e:
            raise self._translate("search_query", None, e) from e

    async def close(self) -> None:
        try:
            await self.cluster.close()
        except CouchbaseException as e:
            logger.warning("Error closing Couchbase cluster", error=str(e))
