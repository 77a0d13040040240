"""
Shared pytest fixtures and configuration for all tests.
"""

import os
from typing import Any

# Tests never talk to a real cluster; must be set before stockroom is imported
os.environ["STOCKROOM_STORE_BACKEND"] = "memory"
os.environ.setdefault("STOCKROOM_DEBUG", "false")

import pytest

from stockroom.graphql.schema import schema
from stockroom.store.base import CollectionConfig
from stockroom.store.implementations.memory import InMemoryProductStore


@pytest.fixture
def collection_config() -> CollectionConfig:
    return CollectionConfig()


@pytest.fixture
def store(collection_config: CollectionConfig) -> InMemoryProductStore:
    return InMemoryProductStore(collection_config)


@pytest.fixture
def execute(store: InMemoryProductStore):
    """Run a GraphQL document against the schema with ``store`` in context."""

    async def _execute(query: str, variables: dict[str, Any] | None = None):
        return await schema.execute(
            query,
            variable_values=variables,
            context_value={"request": None, "store": store},
        )

    return _execute
