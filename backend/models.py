from sqlalchemy import Column, String, Integer, DateTime, ForeignKey, CheckConstraint, UniqueConstraint, Index
from sqlalchemy.orm import relationship
from sqlalchemy.types import TypeDecorator
from datetime import datetime
from decimal import Decimal
import uuid
from database import Base
from constants import MoneyConfig
from domain.value_objects.order_status import OrderStatus

def generate_uuid():
    return str(uuid.uuid4())


class ExactDecimal(TypeDecorator):
    """
    Stores a Decimal as its canonical text so reads return the exact value
    written, independent of the backend's numeric support.

    ExactDecimal(n) bounds the text to n characters; ExactDecimal() is unbounded.
    """
    impl = String
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        return str(Decimal(value))

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        return Decimal(value)


class OrderModel(Base):
    """
    Persisted order header.

    total_price is denormalised from the items so it can be queried
    directly; the domain aggregate recomputes it on load.
    """
    __tablename__ = 'orders'

    id = Column(String, primary_key=True, default=generate_uuid)
    customer_id = Column(String, nullable=False)
    total_price = Column(ExactDecimal(), nullable=False, default=Decimal("0"))  # sum of lines: no fixed width
    status = Column(String, nullable=False, default=OrderStatus.CREATED.value)
    created_at = Column(DateTime, nullable=False, default=datetime.now)
    updated_at = Column(DateTime, nullable=False, default=datetime.now)
    version = Column(Integer, nullable=False)

    items = relationship(
        "OrderItemModel",
        order_by="OrderItemModel.position",
        cascade="all, delete-orphan",
        lazy="selectin",
    )

    __table_args__ = (
        CheckConstraint("customer_id != ''"),
        CheckConstraint(
            "status IN ('CREATED', 'PROCESSING', 'COMPLETED', 'CANCELLED')",
            name='ck_orders_status'
        ),
        Index('idx_orders_customer', 'customer_id'),
        Index('idx_orders_status', 'status'),
    )

    # UPDATE ... WHERE version = <loaded version>; a stale copy raises StaleDataError
    __mapper_args__ = {"version_id_col": version}


class OrderItemModel(Base):
    """
    Persisted order line. order_id + position link the line to its order
    and keep insertion order.
    """
    __tablename__ = 'order_items'

    id = Column(Integer, primary_key=True, autoincrement=True)
    order_id = Column(String, ForeignKey('orders.id', ondelete='CASCADE'), nullable=False)
    position = Column(Integer, nullable=False)
    product_id = Column(String, nullable=False)
    quantity = Column(Integer, nullable=False)
    price = Column(ExactDecimal(MoneyConfig.PRECISION + 2), nullable=False)  # digits, sign, point

    __table_args__ = (
        CheckConstraint("product_id != ''"),
        CheckConstraint("quantity > 0", name='ck_order_items_quantity'),
        UniqueConstraint('order_id', 'position', name='uq_order_item_position'),
        Index('idx_order_items_order', 'order_id'),
    )
