from datetime import datetime

from pydantic import BaseModel
from sqlalchemy import Column, String, Integer, Boolean, DateTime, ForeignKey, CheckConstraint, Index, func
from sqlalchemy import Enum as SQLEnum
from sqlalchemy.orm import relationship

from enums.order_status import OrderStatus
from models.base import Base, generate_uuid


class Order(Base):
    __tablename__ = 'orders'

    id = Column(String(36), primary_key=True, default=generate_uuid)
    foodtruck_id = Column(String(36), ForeignKey('foodtrucks.id', ondelete='CASCADE'), nullable=False)
    status = Column(SQLEnum(OrderStatus), nullable=False, default=OrderStatus.PENDING)

    # Customer
    customer_email = Column(String, nullable=False)
    customer_name = Column(String, nullable=False)
    customer_phone = Column(String, nullable=True)

    # Pickup
    pickup_time = Column(DateTime, nullable=False)  # naive UTC
    is_asap = Column(Boolean, nullable=False, default=False)
    notes = Column(String, nullable=True)

    # Amounts (server-computed, integer cents)
    subtotal_cents = Column(Integer, nullable=False)
    total_amount_cents = Column(Integer, nullable=False)
    discount_amount_cents = Column(Integer, nullable=False, default=0)  # sum of every source
    promo_code_id = Column(String(36), ForeignKey('promo_codes.id', ondelete='SET NULL'), nullable=True)
    promo_discount_cents = Column(Integer, nullable=False, default=0)
    deal_id = Column(String(36), nullable=True)  # deals.id or offers.id (legacy fallback)
    deal_discount_cents = Column(Integer, nullable=False, default=0)
    offers_discount_cents = Column(Integer, nullable=False, default=0)
    loyalty_discount_cents = Column(Integer, nullable=False, default=0)

    created_at = Column(DateTime, default=func.now())

    items = relationship('OrderItem', back_populates='order', cascade='all, delete-orphan')

    __table_args__ = (
        CheckConstraint('total_amount_cents >= 0', name='check_order_total_non_negative'),
        CheckConstraint('subtotal_cents >= 0', name='check_order_subtotal_non_negative'),
        Index('ix_orders_foodtruck_pickup', 'foodtruck_id', 'pickup_time'),
    )


class OrderDTO(BaseModel):
    id: str | None = None
    foodtruck_id: str | None = None
    status: OrderStatus | None = None
    customer_email: str | None = None
    customer_name: str | None = None
    customer_phone: str | None = None
    pickup_time: datetime | None = None
    is_asap: bool = False
    notes: str | None = None
    subtotal_cents: int | None = None
    total_amount_cents: int | None = None
    discount_amount_cents: int = 0
    promo_code_id: str | None = None
    promo_discount_cents: int = 0
    deal_id: str | None = None
    deal_discount_cents: int = 0
    offers_discount_cents: int = 0
    loyalty_discount_cents: int = 0
    created_at: datetime | None = None
