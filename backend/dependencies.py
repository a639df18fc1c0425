"""
Dependency injection providers for FastAPI.

This module provides factory functions for creating repository and service instances,
following the Dependency Inversion Principle. This allows for easier testing
and better separation of concerns.
"""

from sqlalchemy.orm import Session
from fastapi import Depends
from database import get_db
from repositories.order_repository import OrderRepository
from services.interfaces import IOrderService
from services.order_service import OrderService


def get_order_repository(db: Session) -> OrderRepository:
    """
    Factory function for creating OrderRepository instances.

    Args:
        db: Database session

    Returns:
        OrderRepository instance
    """
    return OrderRepository(db)


def get_order_service(db: Session = Depends(get_db)) -> IOrderService:
    """
    Factory function for creating OrderService instances.

    Args:
        db: Database session (injected)

    Returns:
        IOrderService: Order service implementation
    """
    return OrderService(db, order_repo=get_order_repository(db))
