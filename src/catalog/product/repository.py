from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from catalog import db
from catalog.product.model import Product, ProductPayload, WriteOutcome


class ProductRepository(ABC):
    """
    Storage contract for products.

    Implementations must be safe to share between concurrent requests.
    Update and delete are single atomic operations that report their
    outcome instead of relying on a separate existence check.
    """

    @abstractmethod
    def list(self) -> Optional[List[Product]]:
        """Return every product, or None if the collection is unavailable."""

    @abstractmethod
    def get_by_id(self, product_id: UUID) -> Optional[Product]:
        """Return a product by its ID, or None if not found."""

    @abstractmethod
    def add(self, payload: ProductPayload) -> Product:
        """Insert a new product and return it with its assigned ID."""

    @abstractmethod
    def update(
        self,
        product_id: UUID,
        payload: ProductPayload,
        expected_version: Optional[int] = None,
    ) -> WriteOutcome:
        """
        Replace the mutable fields of a product.

        When expected_version is given the write only applies if the stored
        version still matches; otherwise CONFLICT is returned.
        """

    @abstractmethod
    def delete(self, product_id: UUID) -> WriteOutcome:
        """Delete a product, reporting APPLIED or NOT_FOUND."""


class PostgresProductRepository(ProductRepository):
    """
    Repository for product data access.
    Encapsulates all SQL and queries for the products table.
    """

    def list(self) -> List[Product]:
        rows = db.fetch_all("SELECT * FROM products ORDER BY created_at, id")
        return [Product.from_row(row) for row in rows]

    def get_by_id(self, product_id: UUID) -> Optional[Product]:
        row = db.fetch_one("SELECT * FROM products WHERE id = %s", (product_id,))
        return Product.from_row(row) if row else None

    def add(self, payload: ProductPayload) -> Product:
        row = db.fetch_one(
            """
            INSERT INTO products (title, description, price, quantity)
            VALUES (%s, %s, %s, %s)
            RETURNING *
            """,
            (payload.title, payload.description, payload.price, payload.quantity),
        )
        return Product.from_row(row)

    def update(
        self,
        product_id: UUID,
        payload: ProductPayload,
        expected_version: Optional[int] = None,
    ) -> WriteOutcome:
        with db.get_cursor() as cur:
            cur.execute(
                """
                UPDATE products
                SET title = %s,
                    description = %s,
                    price = %s,
                    quantity = %s,
                    version = version + 1,
                    updated_at = now()
                WHERE id = %s
                  AND (%s::integer IS NULL OR version = %s)
                RETURNING id
                """,
                (
                    payload.title,
                    payload.description,
                    payload.price,
                    payload.quantity,
                    product_id,
                    expected_version,
                    expected_version,
                ),
            )
            if cur.fetchone():
                return WriteOutcome.APPLIED

            # Nothing matched: either the row is gone or its version moved on
            cur.execute("SELECT 1 FROM products WHERE id = %s", (product_id,))
            if cur.fetchone():
                return WriteOutcome.CONFLICT
            return WriteOutcome.NOT_FOUND

    def delete(self, product_id: UUID) -> WriteOutcome:
        deleted = db.execute("DELETE FROM products WHERE id = %s", (product_id,))
        return WriteOutcome.APPLIED if deleted else WriteOutcome.NOT_FOUND
