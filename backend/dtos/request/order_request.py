"""
Order Request DTOs

DTOs for order-related API requests.
"""

from decimal import Decimal
from typing import List

from pydantic import BaseModel, Field, field_validator

from constants import MoneyConfig
from domain.value_objects.order_status import OrderStatus


class OrderItemRequest(BaseModel):
    """One requested order line."""

    product_id: str = Field(description="Product identifier")
    quantity: int = Field(gt=0, description="Number of units (positive)")
    price: Decimal = Field(
        ge=0,
        max_digits=MoneyConfig.PRECISION,
        decimal_places=MoneyConfig.SCALE,
        description="Unit price",
    )

    @field_validator("product_id")
    @classmethod
    def validate_product_id(cls, v):
        """Product ID must not be blank."""
        if not v.strip():
            raise ValueError("Product ID is required")
        return v


class CreateOrderRequest(BaseModel):
    """
    Request DTO for creating an order.

    Clear contract for order creation.
    """

    customer_id: str = Field(description="Customer identifier")
    items: List[OrderItemRequest] = Field(description="Order lines, in order")

    @field_validator("customer_id")
    @classmethod
    def validate_customer_id(cls, v):
        """Customer ID must not be blank."""
        if not v.strip():
            raise ValueError("Customer ID is required")
        return v

    @field_validator("items")
    @classmethod
    def validate_items(cls, v):
        """At least one line is required."""
        if not v:
            raise ValueError("Order must contain at least one item")
        return v

    class Config:
        """Pydantic configuration."""
        json_schema_extra = {
            "example": {
                "customer_id": "c1",
                "items": [
                    {"product_id": "A1", "quantity": 2, "price": "10.00"},
                    {"product_id": "B2", "quantity": 1, "price": "20.00"},
                ]
            }
        }


class UpdateOrderStatusRequest(BaseModel):
    """Request DTO for moving an order to a new status."""

    status: OrderStatus = Field(description="Target status")

    @field_validator("status", mode="before")
    @classmethod
    def normalise_status(cls, v):
        """Accept status names in any case."""
        if isinstance(v, str):
            return v.strip().upper()
        return v
