"""Tests for request logging middleware helpers."""

import pytest

from stockroom.middleware import operation_name_from_query, sanitize_query_params


@pytest.mark.parametrize(
    "query,expected",
    [
        ("query GetProduct($id: String) { getProduct(id: $id) { name } }", "GetProduct"),
        ("mutation Create($p: ProductInput) { createProduct(product: $p) { name } }",
         "mutation:Create"),
        ('{ getProduct(id: "1") { name } }', "getProduct"),
        ('mutation { deleteProduct(id: "1") }', "mutation:deleteProduct"),
        ("query IntrospectionQuery { __schema { types { name } } }", "__introspection"),
        ("{ }", "unnamed_operation"),
    ],
)
def test_operation_name_from_query(query, expected):
    assert operation_name_from_query(query) == expected


def test_sanitize_query_params_redacts_secrets():
    params = {"password": "hunter2", "api_key": "abc", "term": "coffee"}

    assert sanitize_query_params(params) == {
        "password": "[REDACTED]",
        "api_key": "[REDACTED]",
        "term": "coffee",
    }
