"""Tests for the Couchbase product store."""

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from couchbase.exceptions import (
    AuthenticationException,
    DocumentExistsException,
    DocumentNotFoundException,
    PathNotFoundException,
    UnAmbiguousTimeoutException,
)
from couchbase.search import MatchQuery

from stockroom.store.base import (
    CollectionConfig,
    ProductAlreadyExistsError,
    ProductNotFoundError,
    ProductStoreError,
)
from stockroom.store.implementations.couchbase import CouchbaseProductStore, connect_cluster


def search_rows(*ids, error: Exception | None = None):
    """Build a rows() callable yielding search hits with the given ids."""

    async def rows():
        for key in ids:
            yield SimpleNamespace(id=key)
        if error is not None:
            raise error

    return rows


class TestCouchbaseProductStore:
    """Test the Couchbase store against a mocked cluster."""

    @pytest.fixture
    def collection(self) -> MagicMock:
        collection = MagicMock()
        for name in ("get", "insert", "replace", "remove", "mutate_in"):
            setattr(collection, name, AsyncMock())
        return collection

    @pytest.fixture
    def cluster(self, collection: MagicMock) -> MagicMock:
        cluster = MagicMock()
        cluster.bucket.return_value.scope.return_value.collection.return_value = collection
        cluster.close = AsyncMock()
        return cluster

    @pytest.fixture
    def store(self, cluster: MagicMock) -> CouchbaseProductStore:
        return CouchbaseProductStore(cluster, CollectionConfig())

    @pytest.mark.asyncio
    async def test_get_addresses_configured_collection(self, store, cluster, collection):
        collection.get.return_value = SimpleNamespace(content_as={dict: {"name": "Tea"}})

        assert await store.get("p-1") == {"name": "Tea"}

        cluster.bucket.assert_called_with("store-bucket")
        cluster.bucket.return_value.scope.assert_called_with("products-scope")
        cluster.bucket.return_value.scope.return_value.collection.assert_called_with("products")
        collection.get.assert_awaited_once_with("p-1")

    @pytest.mark.asyncio
    async def test_get_missing_document_maps_to_not_found(self, store, collection):
        error = DocumentNotFoundException(message="document not found")
        collection.get.side_effect = error

        with pytest.raises(ProductNotFoundError) as exc_info:
            await store.get("p-1")

        assert exc_info.value.key == "p-1"
        assert exc_info.value.__cause__ is error
        assert str(exc_info.value) == str(error)

    @pytest.mark.asyncio
    async def test_failure_is_logged_before_raising(self, store, collection):
        error = DocumentNotFoundException(message="document not found")
        collection.remove.side_effect = error

        with patch("stockroom.store.implementations.couchbase.logger") as mock_logger:
            with pytest.raises(ProductNotFoundError):
                await store.delete("p-1")

        mock_logger.error.assert_called_once_with(
            "Couchbase operation failed",
            operation="remove",
            key="p-1",
            error_type="DocumentNotFoundException",
            error=str(error),
        )

    @pytest.mark.asyncio
    async def test_create_inserts_under_generated_key(self, store, collection):
        with patch("stockroom.store.base.generate_product_key", return_value="new-key"):
            key = await store.create({"name": "Tea"})

        assert key == "new-key"
        collection.insert.assert_awaited_once_with("new-key", {"name": "Tea"})

    @pytest.mark.asyncio
    async def test_insert_existing_key_maps_to_already_exists(self, store, collection):
        collection.insert.side_effect = DocumentExistsException(message="exists")

        with pytest.raises(ProductAlreadyExistsError):
            await store.insert("p-1", {"name": "Tea"})

    @pytest.mark.asyncio
    async def test_replace_sends_whole_document(self, store, collection):
        await store.replace("p-1", {"name": "Tea"})

        collection.replace.assert_awaited_once_with("p-1", {"name": "Tea"})

    @pytest.mark.asyncio
    async def test_delete_uses_remove(self, store, collection):
        collection.remove.side_effect = DocumentNotFoundException(message="document not found")

        with pytest.raises(ProductNotFoundError):
            await store.delete("p-1")

        collection.remove.assert_awaited_once_with("p-1")

    @pytest.mark.asyncio
    async def test_set_quantity_uses_subdocument_replace(self, store, collection):
        with patch("stockroom.store.implementations.couchbase.SD") as mock_sd:
            await store.set_quantity("p-1", 7)

        mock_sd.replace.assert_called_once_with("quantity", 7)
        collection.mutate_in.assert_awaited_once_with("p-1", (mock_sd.replace.return_value,))

    @pytest.mark.asyncio
    async def test_set_quantity_missing_path_maps_to_not_found(self, store, collection):
        collection.mutate_in.side_effect = PathNotFoundException(message="path not found")

        with pytest.raises(ProductNotFoundError):
            await store.set_quantity("p-1", 7)

    @pytest.mark.asyncio
    async def test_other_failures_map_to_store_error(self, store, collection):
        collection.get.side_effect = UnAmbiguousTimeoutException(message="timed out")

        with pytest.raises(ProductStoreError) as exc_info:
            await store.get("p-1")

        assert not isinstance(exc_info.value, ProductNotFoundError)

    @pytest.mark.asyncio
    async def test_search_queries_index_with_limit(self, store, cluster):
        cluster.search_query.return_value = SimpleNamespace(rows=search_rows("b", "a"))

        with patch("stockroom.store.implementations.couchbase.SearchOptions") as mock_options:
            keys = await store.search("coffee")

        assert keys == ["b", "a"]
        mock_options.assert_called_once_with(limit=2)
        index, query, options = cluster.search_query.call_args.args
        assert index == "index-products"
        assert isinstance(query, MatchQuery)
        assert options is mock_options.return_value

    @pytest.mark.asyncio
    async def test_search_with_zero_limit_skips_query(self, store, cluster):
        assert await store.search("coffee", limit=0) == []

        cluster.search_query.assert_not_called()

    @pytest.mark.asyncio
    async def test_search_backend_error_maps_to_store_error(self, store, cluster):
        cluster.search_query.return_value = SimpleNamespace(
            rows=search_rows("a", error=AuthenticationException(message="denied"))
        )

        with pytest.raises(ProductStoreError, match="denied"):
            await store.search("coffee")

    @pytest.mark.asyncio
    async def test_close_closes_cluster(self, store, cluster):
        await store.close()

        cluster.close.assert_awaited_once()


class TestConnectCluster:
    """Test cluster connection setup."""

    @pytest.mark.asyncio
    async def test_connect_applies_profile_and_waits(self):
        cluster = MagicMock()
        cluster.wait_until_ready = AsyncMock()

        with (
            patch("stockroom.store.implementations.couchbase.PasswordAuthenticator") as mock_auth,
            patch("stockroom.store.implementations.couchbase.ClusterOptions") as mock_options,
            patch(
                "stockroom.store.implementations.couchbase.Cluster.connect",
                new=AsyncMock(return_value=cluster),
            ) as mock_connect,
        ):
            result = await connect_cluster("couchbases://example", "user", "secret")

        assert result is cluster
        mock_auth.assert_called_once_with("user", "secret")
        mock_options.assert_called_once_with(mock_auth.return_value)
        mock_options.return_value.apply_profile.assert_called_once_with("wan_development")
        mock_connect.assert_awaited_once_with("couchbases://example", mock_options.return_value)
        cluster.wait_until_ready.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_connect_without_profile(self):
        cluster = MagicMock()
        cluster.wait_until_ready = AsyncMock()

        with (
            patch("stockroom.store.implementations.couchbase.PasswordAuthenticator"),
            patch("stockroom.store.implementations.couchbase.ClusterOptions") as mock_options,
            patch(
                "stockroom.store.implementations.couchbase.Cluster.connect",
                new=AsyncMock(return_value=cluster),
            ),
        ):
            await connect_cluster("couchbase://localhost", "user", "secret", config_profile="")

        mock_options.return_value.apply_profile.assert_not_called()
