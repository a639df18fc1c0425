"""
OrderItem Entity

A single line of an order: which product, how many, and at what unit price.
Items live only inside their parent Order and have no lifecycle of their own.
"""

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation

from domain.exceptions import InvalidOrderError


def to_decimal(value, field: str = "price") -> Decimal:
    """
    Convert a monetary input to an exact Decimal.

    Floats go through their shortest text form so no binary rounding error
    leaks into order totals.

    Raises:
        InvalidOrderError: If the value is not a finite number
    """
    if isinstance(value, bool):
        raise InvalidOrderError(f"{field} must be a number", field=field)
    if isinstance(value, float):
        value = str(value)
    try:
        amount = Decimal(value)
    except (InvalidOperation, TypeError, ValueError):
        raise InvalidOrderError(f"{field} must be a number, got {value!r}", field=field)
    if not amount.is_finite():
        raise InvalidOrderError(f"{field} must be finite", field=field)
    return amount


@dataclass(frozen=True)
class OrderItem:
    """
    Immutable order line.

    Attributes:
        product_id: Product identifier (non-blank)
        quantity: Number of units (positive)
        price: Unit price (non-negative, exact decimal)
    """

    product_id: str
    quantity: int
    price: Decimal

    def __post_init__(self):
        """Validate and normalise the line."""
        if not isinstance(self.product_id, str) or not self.product_id.strip():
            raise InvalidOrderError("Product ID is required", field="product_id")

        if isinstance(self.quantity, bool) or not isinstance(self.quantity, int):
            raise InvalidOrderError("Quantity must be an integer", field="quantity")
        if self.quantity <= 0:
            raise InvalidOrderError(
                f"Quantity must be positive, got {self.quantity}", field="quantity"
            )

        price = to_decimal(self.price)
        if price < 0:
            raise InvalidOrderError(f"Price cannot be negative: {price}", field="price")
        # frozen dataclass: bypass __setattr__ to store the normalised value
        object.__setattr__(self, "price", price)

    @property
    def subtotal(self) -> Decimal:
        """Unit price times quantity."""
        return self.price * self.quantity
