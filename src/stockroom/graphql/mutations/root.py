"""
Root GraphQL mutation definitions
"""

import strawberry

from ..queries.root import given
from ..types.product import Product, ProductInput


@strawberry.type
class Mutation:
    """Root GraphQL mutation type."""

    @strawberry.mutation(name="createProduct")
    async def create_product(
        self, info: strawberry.Info, product: ProductInput | None = strawberry.UNSET
    ) -> Product | None:
        """Create a product under a newly generated key and echo it back."""
        from ..resolvers.product import create_product

        return await create_product(info, given(product))

    @strawberry.mutation(name="deleteProduct")
    async def delete_product(
        self, info: strawberry.Info, id: str | None = strawberry.UNSET
    ) -> bool | None:
        """Delete a product."""
        from ..resolvers.product import delete_product

        return await delete_product(info, given(id))

    @strawberry.mutation(name="updateProduct")
    async def update_product(
        self,
        info: strawberry.Info,
        id: str | None = strawberry.UNSET,
        product: ProductInput | None = strawberry.UNSET,
    ) -> Product | None:
        """Replace a product's content."""
        from ..resolvers.product import update_product

        return await update_product(info, given(id), given(product))

    @strawberry.mutation(name="setQuantity")
    async def set_quantity(
        self,
        info: strawberry.Info,
        id: str | None = strawberry.UNSET,
        quantity: int | None = strawberry.UNSET,
    ) -> bool | None:
        """Set only the quantity of a product."""
        from ..resolvers.product import set_quantity

        return await set_quantity(info, given(id), given(quantity))
