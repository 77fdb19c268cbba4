from datetime import datetime

from pydantic import BaseModel
from sqlalchemy import Column, String, Integer, Boolean, DateTime, ForeignKey, CheckConstraint, Index, func
from sqlalchemy import Enum as SQLEnum

from enums.discount_type import DiscountType
from models.base import Base, generate_uuid


class PromoCode(Base):
    __tablename__ = 'promo_codes'

    id = Column(String(36), primary_key=True, default=generate_uuid)
    foodtruck_id = Column(String(36), ForeignKey('foodtrucks.id', ondelete='CASCADE'), nullable=False)
    code = Column(String, nullable=False)
    discount_type = Column(SQLEnum(DiscountType), nullable=False)
    discount_value = Column(Integer, nullable=False)  # percent or cents, depending on discount_type
    min_order_amount_cents = Column(Integer, nullable=True)
    max_discount_cents = Column(Integer, nullable=True)
    max_uses = Column(Integer, nullable=True)
    max_uses_per_customer = Column(Integer, nullable=True)
    current_uses = Column(Integer, nullable=False, default=0)
    is_active = Column(Boolean, nullable=False, default=True)
    valid_from = Column(DateTime, nullable=True)
    valid_until = Column(DateTime, nullable=True)

    __table_args__ = (
        CheckConstraint('discount_value >= 0', name='check_promo_discount_value_non_negative'),
        CheckConstraint('current_uses >= 0', name='check_promo_current_uses_non_negative'),
        Index('ix_promo_codes_foodtruck_code', 'foodtruck_id', 'code', unique=True),
    )


class PromoCodeUse(Base):
    __tablename__ = 'promo_code_uses'

    id = Column(String(36), primary_key=True, default=generate_uuid)
    promo_code_id = Column(String(36), ForeignKey('promo_codes.id', ondelete='CASCADE'), nullable=False)
    order_id = Column(String(36), ForeignKey('orders.id', ondelete='CASCADE'), nullable=False)
    customer_email = Column(String, nullable=False)
    discount_applied_cents = Column(Integer, nullable=False)
    used_at = Column(DateTime, default=func.now())


class PromoCodeDTO(BaseModel):
    id: str | None = None
    foodtruck_id: str | None = None
    code: str | None = None
    discount_type: DiscountType | None = None
    discount_value: int | None = None
    min_order_amount_cents: int | None = None
    max_discount_cents: int | None = None
    max_uses: int | None = None
    max_uses_per_customer: int | None = None
    current_uses: int = 0
    is_active: bool | None = None
    valid_from: datetime | None = None
    valid_until: datetime | None = None


class PromoCodeUseDTO(BaseModel):
    id: str | None = None
    promo_code_id: str | None = None
    order_id: str | None = None
    customer_email: str | None = None
    discount_applied_cents: int | None = None
    used_at: datetime | None = None
