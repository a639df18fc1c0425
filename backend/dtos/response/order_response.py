"""
Order Response DTOs

DTOs for order-related API responses.
"""

from pydantic import BaseModel, Field
from datetime import datetime
from decimal import Decimal
from typing import Optional, List, Dict


class OrderItemResponse(BaseModel):
    """Response DTO for one order line."""

    product_id: str = Field(description="Product identifier")
    quantity: int = Field(description="Number of units")
    price: Decimal = Field(description="Unit price")
    subtotal: Decimal = Field(description="price × quantity")

    class Config:
        """Pydantic configuration."""
        from_attributes = True


class OrderResponse(BaseModel):
    """
    Response DTO for an order.

    Built from the service's OrderProjection, never from database rows.
    """

    id: str = Field(description="Order ID")
    customer_id: str = Field(description="Customer identifier")
    items: List[OrderItemResponse] = Field(description="Order lines, in order")
    total_price: Decimal = Field(description="Sum of line subtotals")
    status: str = Field(description="CREATED, PROCESSING, COMPLETED or CANCELLED")
    created_at: datetime = Field(description="Creation timestamp")
    updated_at: datetime = Field(description="Last modification timestamp")

    class Config:
        """Pydantic configuration."""
        from_attributes = True


class ErrorResponse(BaseModel):
    """Body returned for every failed request."""

    status: int = Field(description="HTTP status code")
    error: str = Field(description="HTTP reason phrase")
    message: str = Field(description="Human-readable explanation")
    path: str = Field(description="Request path")
    timestamp: datetime = Field(description="When the error was produced")
    validation_errors: Optional[Dict[str, str]] = Field(
        None, description="Field → message, for invalid request bodies"
    )
