"""
Order Service

Handles business logic for order operations: building the Order aggregate
from a creation request, loading it back, and applying status changes.
Each public method runs as one transaction on the injected session.
"""

from typing import Iterable, List, Optional
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm.exc import StaleDataError
import logging

from domain.aggregates.order import Order
from domain.entities.order_item import OrderItem
from domain.exceptions import IllegalStatusTransitionError, InvalidOrderError
from domain.value_objects.order_status import OrderStatus
from dtos.internal.order_dto import OrderProjection
from exceptions import (
    ConflictError,
    DatabaseError,
    InvalidTransitionError,
    NotFoundError,
    ValidationError,
)
from repositories.order_repository import OrderRepository
from services.interfaces import IOrderService

logger = logging.getLogger(__name__)


class OrderService(IOrderService):
    """Service for order-related business logic."""

    def __init__(self, db: Session, order_repo: Optional[OrderRepository] = None):
        """
        Initialize OrderService.

        Args:
            db: Database session (transaction boundary)
            order_repo: Storage collaborator; defaults to an OrderRepository on db
        """
        self.db = db
        self.order_repo = order_repo or OrderRepository(db)

    def create_order(self, customer_id: str, items: Iterable) -> OrderProjection:
        """
        Create a new order with the given items.

        The aggregate is fully built and validated before anything is written,
        then stored and committed in one transaction.

        Args:
            customer_id: Customer identifier
            items: Objects exposing product_id, quantity and price, in order

        Returns:
            Projection of the stored order

        Raises:
            ValidationError: If input is malformed
            DatabaseError: If the order could not be stored
        """
        logger.info(f"Creating order for customer: {customer_id}")

        order = self._build_order(customer_id, list(items or []))

        try:
            saved = self.order_repo.save(order)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to store order for customer {customer_id}: {e}", exc_info=True)
            raise DatabaseError("create_order", "Failed to store order")

        logger.info(
            f"Created order {saved.id} for customer {saved.customer_id} "
            f"({saved.item_count} item(s), total {saved.total_price})"
        )
        return OrderProjection.from_aggregate(saved)

    def get_order(self, order_id: str) -> OrderProjection:
        """
        Retrieve an order by its ID.

        Args:
            order_id: Order identifier

        Returns:
            Projection of the current order state

        Raises:
            NotFoundError: If the order does not exist
            DatabaseError: If the order could not be read
        """
        logger.debug(f"Retrieving order with ID: {order_id}")
        try:
            order = self.order_repo.find_by_id(order_id)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to read order {order_id}: {e}", exc_info=True)
            raise DatabaseError("get_order", f"Failed to read order {order_id}")

        if order is None:
            logger.warning(f"Order not found with ID: {order_id}")
            raise NotFoundError(order_id)
        return OrderProjection.from_aggregate(order)

    def update_order_status(self, order_id: str, new_status: OrderStatus) -> OrderProjection:
        """
        Update the status of an existing order.

        The order row stays locked from read to commit where the database
        supports row locks; elsewhere the row version rejects a write based on
        a stale read. Nothing is written when the transition is rejected.

        Args:
            order_id: Order identifier
            new_status: Target status

        Returns:
            Projection of the updated order

        Raises:
            NotFoundError: If the order does not exist
            InvalidTransitionError: If the transition is not allowed
            ConflictError: If another writer changed the order first
            DatabaseError: If the change could not be stored
        """
        if not isinstance(new_status, OrderStatus):
            try:
                new_status = OrderStatus.from_string(new_status)
            except ValueError as e:
                raise ValidationError(str(e), invalid_fields={"status": str(e)})
        logger.info(f"Updating order {order_id} to status: {new_status.value}")

        try:
            order = self.order_repo.find_by_id_for_update(order_id)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to read order {order_id} for update: {e}", exc_info=True)
            raise DatabaseError("update_order_status", f"Failed to read order {order_id}")

        if order is None:
            self.db.rollback()
            logger.warning(f"Order not found with ID: {order_id}")
            raise NotFoundError(order_id)

        old_status = order.status
        try:
            order.update_status(new_status)
        except IllegalStatusTransitionError as e:
            self.db.rollback()
            logger.warning(f"Invalid status transition for order {order_id}: {e}")
            raise InvalidTransitionError(e.source.value, e.target.value, str(e))

        try:
            saved = self.order_repo.save(order)
            self.db.commit()
        except StaleDataError as e:
            self.db.rollback()
            logger.warning(f"Order {order_id} changed while being updated: {e}")
            raise ConflictError(order_id)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to store status change for order {order_id}: {e}", exc_info=True)
            raise DatabaseError("update_order_status", f"Failed to update order {order_id}")

        logger.info(f"Updated order {order_id} from {old_status.value} to {new_status.value}")
        if saved.status.is_terminal():
            logger.info(f"Order {order_id} reached final status {saved.status.value}")
        return OrderProjection.from_aggregate(saved)

    def _build_order(self, customer_id: str, items: List) -> Order:
        """
        Construct the aggregate and add every item in input order.

        Raises:
            ValidationError: On the first invalid field
        """
        try:
            order = Order(customer_id)
            if not items:
                raise InvalidOrderError("Order must contain at least one item", field="items")
            for index, raw in enumerate(items):
                order.add_item(self._to_item(raw, index))
        except InvalidOrderError as e:
            logger.warning(f"Rejected order for customer {customer_id!r}: {e}")
            fields = {e.field: str(e)} if e.field else None
            raise ValidationError(str(e), invalid_fields=fields)
        return order

    @staticmethod
    def _to_item(raw, index: int) -> OrderItem:
        """Convert one requested line into a domain OrderItem."""
        if isinstance(raw, OrderItem):
            return raw
        try:
            return OrderItem(
                product_id=raw.product_id,
                quantity=raw.quantity,
                price=raw.price,
            )
        except AttributeError:
            raise InvalidOrderError(
                f"Item {index} must provide product_id, quantity and price",
                field=f"items[{index}]",
            )
        except InvalidOrderError as e:
            raise InvalidOrderError(str(e), field=f"items[{index}].{e.field}")
