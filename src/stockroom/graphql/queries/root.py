"""
Root GraphQL query definitions
"""

from typing import Any

import strawberry

from ..types.product import Product


def given(value: Any) -> Any:
    """Map an omitted argument to None."""
    return None if value is strawberry.UNSET else value


@strawberry.type
class Query:
    """Root GraphQL query type."""

    @strawberry.field(name="getProduct")
    async def get_product(
        self, info: strawberry.Info, id: str | None = strawberry.UNSET
    ) -> Product | None:
        """Get a product by its key."""
        from ..resolvers.product import resolve_product_by_id

        return await resolve_product_by_id(info, given(id))

    @strawberry.field(name="getAllProductsWithTerm")
    async def get_all_products_with_term(
        self, info: strawberry.Info, term: str | None = strawberry.UNSET
    ) -> list[Product | None] | None:
        """Full-text search for products matching a term (at most two results)."""
        from ..resolvers.product import resolve_products_with_term

        return await resolve_products_with_term(info, given(term))
