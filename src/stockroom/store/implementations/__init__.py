"""Product store implementations."""

from .memory import InMemoryProductStore

__all__ = ["InMemoryProductStore"]
