"""Product document stores."""

from .base import (
    CollectionConfig,
    ProductAlreadyExistsError,
    ProductDocument,
    ProductNotFoundError,
    ProductStore,
    ProductStoreError,
)
from .factory import create_product_store
from .implementations.memory import InMemoryProductStore

__all__ = [
    "CollectionConfig",
    "InMemoryProductStore",
    "ProductAlreadyExistsError",
    "ProductDocument",
    "ProductNotFoundError",
    "ProductStore",
    "ProductStoreError",
    "create_product_store",
]
