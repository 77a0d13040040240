"""
Stockroom
GraphQL gateway for a Couchbase-backed product catalogue
"""

__version__ = "0.1.0"

from .config import settings

__all__ = ["settings", "__version__"]
