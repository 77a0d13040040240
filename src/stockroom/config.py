"""
Configuration management for the Stockroom gateway
"""

from pydantic_settings import BaseSettings

from .store.base import CollectionConfig


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Store backend: 'couchbase' or 'memory'
    store_backend: str = "couchbase"

    # Couchbase connection
    couchbase_connection_string: str = "couchbase://localhost"
    couchbase_username: str = "Administrator"
    couchbase_password: str = "password"
    # Profile applied to cluster options; empty string leaves SDK defaults
    couchbase_config_profile: str = "wan_development"
    couchbase_connect_timeout: int = 10  # seconds

    # Product collection addressing
    couchbase_bucket: str = "store-bucket"
    couchbase_scope: str = "products-scope"
    couchbase_collection: str = "products"

    # Full-text search
    search_index: str = "index-products"
    search_limit: int = 2

    # API Settings
    api_host: str = "0.0.0.0"
    api_port: int = 4000
    api_reload: bool = False
    cors_origins: list[str] = ["*"]

    # Environment
    debug: bool = False
    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        env_prefix = "STOCKROOM_"
        case_sensitive = False

    def collection_config(self) -> CollectionConfig:
        """Resource addressing for the product collection and its search index."""
        return CollectionConfig(
            bucket=self.couchbase_bucket,
            scope=self.couchbase_scope,
            collection=self.couchbase_collection,
            search_index=self.search_index,
            search_limit=self.search_limit,
        )


# Global settings instance
settings = Settings()
