"""In-process product store for local development and tests."""

import copy

from ...logging import get_logger
from ..base import (
    CollectionConfig,
    ProductAlreadyExistsError,
    ProductDocument,
    ProductNotFoundError,
    ProductStore,
)

logger = get_logger(__name__)


class InMemoryProductStore(ProductStore):
    """Dict-backed store with the same error classification as Couchbase.

    Search is a case-insensitive substring match over ``name`` and ``tags``,
    returned in insertion order.
    """

    def __init__(self, config: CollectionConfig | None = None):
        super().__init__(config)
        self._documents: dict[str, ProductDocument] = {}

    def _require(self, key: str) -> ProductDocument:
        try:
            return self._documents[key]
        except KeyError:
            logger.error("Product document not found", key=key)
            raise ProductNotFoundError(f"Document not found: {key}", key=key) from None

    async def get(self, key: str) -> ProductDocument:
        return copy.deepcopy(self._require(key))

    async def insert(self, key: str, document: ProductDocument) -> None:
        if key in self._documents:
            logger.error("Product document already exists", key=key)
            raise ProductAlreadyExistsError(f"Document exists: {key}", key=key)
        self._documents[key] = copy.deepcopy(document)

    async def replace(self, key: str, document: ProductDocument) -> None:
        self._require(key)
        self._documents[key] = copy.deepcopy(document)

    async def delete(self, key: str) -> None:
        self._require(key)
        del self._documents[key]

    async def set_quantity(self, key: str, quantity: int | None) -> None:
        document = self._require(key)
        if "quantity" not in document:
            logger.error("Product path not found", key=key, path="quantity")
            raise ProductNotFoundError(f"Path not found: quantity in {key}", key=key)
        document["quantity"] = quantity

    async def search(self, term: str, limit: int | None = None) -> list[str]:
        if limit is None:
            limit = self.config.search_limit
        needle = (term or "").lower()
        if not needle or limit <= 0:
            return []

        matches = []
        for key, document in self._documents.items():
            haystack = [document.get("name") or ""]
            haystack.extend(tag for tag in document.get("tags") or [] if tag)
            if any(needle in value.lower() for value in haystack):
                matches.append(key)
                if len(matches) >= limit:
                    break
        return matches

    async def close(self) -> None:
        self._documents.clear()
