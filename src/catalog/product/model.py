from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Optional
from uuid import UUID

PRICE_QUANTUM = Decimal("0.01")
# NUMERIC(12, 2) upper bound
MAX_PRICE = Decimal("9999999999.99")
# INTEGER upper bound
MAX_QUANTITY = 2**31 - 1


class ValidationError(ValueError):
    """A product payload failed validation."""


class WriteOutcome(Enum):
    """Result of an atomic update or delete against a repository."""

    APPLIED = "applied"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"


@dataclass
class Product:
    id: UUID
    title: str
    description: str
    price: Decimal
    quantity: int
    version: int = 1

    @classmethod
    def from_row(cls, row: dict) -> "Product":
        return cls(
            id=row["id"],
            title=row["title"],
            description=row["description"],
            price=row["price"],
            quantity=row["quantity"],
            version=row["version"],
        )

    def to_dict(self) -> dict:
        return {
            "id": str(self.id),
            "title": self.title,
            "description": self.description,
            "price": float(self.price),
            "quantity": self.quantity,
            "version": self.version,
        }


@dataclass(frozen=True)
class ProductPayload:
    """
    The caller-supplied fields of a product.

    Used for both create and update; an update replaces all four
    fields as a group.
    """

    title: str
    description: str
    price: Decimal
    quantity: int

    @classmethod
    def from_json(cls, data) -> "ProductPayload":
        """
        Build a payload from a decoded JSON body.

        Raises:
            ValidationError: if a field is missing or out of range
        """
        if not isinstance(data, dict):
            raise ValidationError("Request body must be a JSON object")

        return cls(
            title=_parse_text(data, "title"),
            description=_parse_text(data, "description"),
            price=_parse_price(data),
            quantity=_parse_quantity(data),
        )


def _parse_text(data: dict, field: str) -> str:
    value = data.get(field)
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"'{field}' is required and must be a non-empty string")
    return value


def _parse_price(data: dict) -> Decimal:
    value = data.get("price")
    if value is None:
        raise ValidationError("'price' is required")
    if isinstance(value, bool) or not isinstance(value, (int, float, str)):
        raise ValidationError("'price' must be a number")

    # Decimal accepts digit separators like "1_000"
    if isinstance(value, str) and "_" in value:
        raise ValidationError("'price' must be a number")

    try:
        price = Decimal(str(value))
    except InvalidOperation:
        raise ValidationError("'price' must be a number") from None

    if not price.is_finite():
        raise ValidationError("'price' must be a finite number")
    if price < 0:
        raise ValidationError("'price' must not be negative")
    if price > MAX_PRICE:
        raise ValidationError(f"'price' must not exceed {MAX_PRICE}")
    if price != price.quantize(PRICE_QUANTUM):
        raise ValidationError("'price' must have at most two decimal places")

    return price.quantize(PRICE_QUANTUM)


def _parse_quantity(data: dict) -> int:
    value = data.get("quantity")
    if value is None:
        raise ValidationError("'quantity' is required")
    # bool is a subclass of int
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError("'quantity' must be an integer")
    if value < 0:
        raise ValidationError("'quantity' must not be negative")
    if value > MAX_QUANTITY:
        raise ValidationError(f"'quantity' must not exceed {MAX_QUANTITY}")
    return value


def parse_version(data: dict) -> Optional[int]:
    """Return the optional expected version carried by an update body."""
    value = data.get("version")
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise ValidationError("'version' must be a positive integer")
    return value
