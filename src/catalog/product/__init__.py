"""
Product

This module provides the product record, its storage contract and
the storage backends that implement it.
"""

from catalog.config import STORAGE_BACKENDS, Config
from catalog.product.memory import InMemoryProductRepository
from catalog.product.model import (
    Product,
    ProductPayload,
    ValidationError,
    WriteOutcome,
)
from catalog.product.repository import PostgresProductRepository, ProductRepository


def build_repository(config: Config) -> ProductRepository:
    """Return the repository selected by configuration."""
    if config.storage_backend == "memory":
        return InMemoryProductRepository()
    if config.storage_backend == "postgres":
        if not config.database_url:
            raise ValueError("DATABASE_URL is required for the postgres storage backend")
        return PostgresProductRepository()
    raise ValueError(
        f"Unknown storage backend {config.storage_backend!r}, expected one of {STORAGE_BACKENDS}"
    )


__all__ = [
    "InMemoryProductRepository",
    "PostgresProductRepository",
    "Product",
    "ProductPayload",
    "ProductRepository",
    "ValidationError",
    "WriteOutcome",
    "build_repository",
]
