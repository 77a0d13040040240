from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

import strawberry

from ...logging import get_logger
from ...store.base import ProductStore

if TYPE_CHECKING:
    from ..types.product import Product, ProductInput

logger = get_logger(__name__)


def get_store_from_info(info: strawberry.Info) -> ProductStore:
    """Product store injected into the request context at startup."""
    store = info.context.get("store") if isinstance(info.context, dict) else None
    if store is None:
        raise RuntimeError("Product store is not configured for this request")
    return store


# Query resolvers
async def resolve_product_by_id(info: strawberry.Info, id: str | None) -> Product:
    """Fetch a product by key. A missing key raises ProductNotFoundError."""
    from ..types.product import Product

    store = get_store_from_info(info)
    document = await store.get(id)
    return Product.from_document(document)


async def resolve_products_with_term(info: strawberry.Info, term: str | None) -> list[Product]:
    """
    Full-text search for ``term``, then fetch every hit.

    Hits are fetched concurrently but returned in search rank order. If any
    hit has disappeared by fetch time the whole query fails.
    """
    from ..types.product import Product

    store = get_store_from_info(info)
    keys = await store.search(term, store.config.search_limit)
    logger.debug("Product search completed", term=term, hits=len(keys))

    documents = await asyncio.gather(*(store.get(key) for key in keys))
    return [Product.from_document(document) for document in documents]


# Mutation resolvers
async def create_product(info: strawberry.Info, product: ProductInput | None) -> Product | None:
    """
    Insert the product under a new random key.

    Echoes the input back; the generated key is only logged.
    """
    store = get_store_from_info(info)
    document = product.to_document() if product is not None else {}
    key = await store.create(document)
    logger.info("Product created", key=key)
    return product.to_product() if product is not None else None


async def delete_product(info: strawberry.Info, id: str | None) -> bool:
    store = get_store_from_info(info)
    await store.delete(id)
    logger.info("Product deleted", key=id)
    return True


async def update_product(
    info: strawberry.Info, id: str | None, product: ProductInput | None
) -> Product | None:
    """Replace the whole stored document; omitted fields are dropped, not merged."""
    store = get_store_from_info(info)
    document = product.to_document() if product is not None else {}
    await store.replace(id, document)
    logger.info("Product replaced", key=id)
    return product.to_product() if product is not None else None


async def set_quantity(info: strawberry.Info, id: str | None, quantity: int | None) -> bool:
    """Patch only the quantity field in place."""
    store = get_store_from_info(info)
    await store.set_quantity(id, quantity)
    logger.info("Product quantity set", key=id, quantity=quantity)
    return True
