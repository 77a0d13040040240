"""Core product store interfaces and error classification."""

import uuid
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

ProductDocument = dict[str, Any]


@dataclass(frozen=True)
class CollectionConfig:
    """Where product documents live and how they are searched."""

    bucket: str = "store-bucket"
    scope: str = "products-scope"
    collection: str = "products"
    search_index: str = "index-products"
    search_limit: int = 2


class ProductStoreError(Exception):
    """Base exception for product store operations (transport or backend failure)."""

    def __init__(self, message: str, key: str | None = None):
        super().__init__(message)
        self.key = key


class ProductNotFoundError(ProductStoreError):
    """Document key (or sub-document path) does not exist."""

    pass


class ProductAlreadyExistsError(ProductStoreError):
    """Document key is already taken on insert."""

    pass


class ProductStore(ABC):
    """Abstract base class for product document stores.

    A store is constructed once per process and shared by all requests.
    Every method performs exactly one backend round trip (``search``
    excepted, which may stream rows) and raises a ``ProductStoreError``
    subclass on failure.
    """

    def __init__(self, config: CollectionConfig | None = None):
        self.config = config or CollectionConfig()

    @abstractmethod
    async def get(self, key: str) -> ProductDocument:
        """Fetch a document by key.

        Raises:
            ProductNotFoundError: If no document is stored under ``key``
        """
        pass

    @abstractmethod
    async def insert(self, key: str, document: ProductDocument) -> None:
        """Insert a document under a new key.

        Raises:
            ProductAlreadyExistsError: If ``key`` is already taken
        """
        pass

    @abstractmethod
    async def replace(self, key: str, document: ProductDocument) -> None:
        """Replace the whole document stored under ``key``.

        Raises:
            ProductNotFoundError: If no document is stored under ``key``
        """
        pass

    @abstractmethod
    async def delete(self, key: str) -> None:
        """Remove the document stored under ``key``.

        Raises:
            ProductNotFoundError: If no document is stored under ``key``
        """
        pass

    @abstractmethod
    async def set_quantity(self, key: str, quantity: int | None) -> None:
        """Replace only the ``quantity`` field of a stored document.

        Raises:
            ProductNotFoundError: If the document or its ``quantity`` field is missing
        """
        pass

    @abstractmethod
    async def search(self, term: str, limit: int | None = None) -> list[str]:
        """Return keys of documents matching ``term``, best match first."""
        pass

    async def create(self, document: ProductDocument) -> str:
        """Insert a document under a freshly generated key and return the key."""
        key = generate_product_key()
        await self.insert(key, document)
        return key

    async def close(self) -> None:
        """Release backend resources."""
        return None


def generate_product_key() -> str:
    """Random UUID4 string; collisions are not re-checked."""
    return str(uuid.uuid4())
