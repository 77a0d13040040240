"""
Product GraphQL type definitions
"""

from dataclasses import fields
from typing import Any

import strawberry

PRODUCT_FIELDS = ("name", "price", "quantity", "tags")


@strawberry.type
class Product:
    """Product type for GraphQL API."""

    name: str | None = None
    price: float | None = None
    quantity: int | None = None
    tags: list[str | None] | None = None

    @classmethod
    def from_document(cls, document: dict[str, Any] | None) -> "Product":
        """Build a Product from a stored document; unknown keys are ignored."""
        document = document or {}
        return cls(**{name: document.get(name) for name in PRODUCT_FIELDS})


@strawberry.input
class ProductInput:
    """Input for creating or replacing a product."""

    name: str | None = strawberry.UNSET
    price: float | None = strawberry.UNSET
    quantity: int | None = strawberry.UNSET
    tags: list[str | None] | None = strawberry.UNSET

    def to_document(self) -> dict[str, Any]:
        """Stored document holding only the fields the caller supplied."""
        document = {}
        for field in fields(self):
            value = getattr(self, field.name)
            if value is not strawberry.UNSET:
                document[field.name] = value
        return document

    def to_product(self) -> Product:
        return Product.from_document(self.to_document())
