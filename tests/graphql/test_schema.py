"""
Tests for the public GraphQL schema shape
"""

import pytest

from stockroom.graphql.schema import schema, validate_schema


@pytest.fixture(scope="module")
def sdl() -> str:
    return str(schema)


def test_validate_schema_passes():
    validate_schema()


@pytest.mark.parametrize(
    "line",
    [
        "getProduct(id: String): Product",
        "getAllProductsWithTerm(term: String): [Product]",
        "createProduct(product: ProductInput): Product",
        "deleteProduct(id: String): Boolean",
        "updateProduct(id: String, product: ProductInput): Product",
        "setQuantity(id: String, quantity: Int): Boolean",
    ],
)
def test_root_fields_match_wire_contract(sdl: str, line: str):
    assert line in sdl


def test_product_type_fields_are_nullable(sdl: str):
    product_block = sdl.split("type Product {", 1)[1].split("}", 1)[0]
    assert "name: String\n" in product_block
    assert "price: Float\n" in product_block
    assert "quantity: Int\n" in product_block
    assert "tags: [String]\n" in product_block
    assert "!" not in product_block


def test_product_input_fields_are_nullable(sdl: str):
    input_block = sdl.split("input ProductInput {", 1)[1].split("}", 1)[0]
    for field in ("name: String", "price: Float", "quantity: Int", "tags: [String]"):
        assert field in input_block
    assert "!" not in input_block
    assert "=" not in input_block
