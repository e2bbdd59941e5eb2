"""In-memory product repository.

Keeps everything in a dict guarded by a lock. Used for local
development (CATALOG_STORAGE=memory) and by the API tests.
"""

import threading
import uuid
from dataclasses import replace
from typing import Dict, List, Optional
from uuid import UUID

from catalog.product.model import Product, ProductPayload, WriteOutcome
from catalog.product.repository import ProductRepository


class InMemoryProductRepository(ProductRepository):
    def __init__(self, products: Optional[List[Product]] = None) -> None:
        self._lock = threading.Lock()
        self._store: Dict[UUID, Product] = {}
        for p in products or []:
            self._store[p.id] = replace(p)

    def list(self) -> List[Product]:
        with self._lock:
            return [replace(p) for p in self._store.values()]

    def get_by_id(self, product_id: UUID) -> Optional[Product]:
        with self._lock:
            product = self._store.get(product_id)
            return replace(product) if product else None

    def add(self, payload: ProductPayload) -> Product:
        product = Product(
            id=uuid.uuid4(),
            title=payload.title,
            description=payload.description,
            price=payload.price,
            quantity=payload.quantity,
        )
        with self._lock:
            self._store[product.id] = product
        return replace(product)

    def update(
        self,
        product_id: UUID,
        payload: ProductPayload,
        expected_version: Optional[int] = None,
    ) -> WriteOutcome:
        with self._lock:
            current = self._store.get(product_id)
            if current is None:
                return WriteOutcome.NOT_FOUND
            if expected_version is not None and current.version != expected_version:
                return WriteOutcome.CONFLICT

            self._store[product_id] = replace(
                current,
                title=payload.title,
                description=payload.description,
                price=payload.price,
                quantity=payload.quantity,
                version=current.version + 1,
            )
            return WriteOutcome.APPLIED

    def delete(self, product_id: UUID) -> WriteOutcome:
        with self._lock:
            if self._store.pop(product_id, None) is None:
                return WriteOutcome.NOT_FOUND
            return WriteOutcome.APPLIED
