from datetime import datetime

from pydantic import BaseModel
from sqlalchemy import Column, String, Integer, Boolean, DateTime, ForeignKey, func
from sqlalchemy import Enum as SQLEnum

from enums.deal_reward_type import DealRewardType
from models.base import Base, generate_uuid


class Deal(Base):
    """
    Legacy single-deal rule: buy trigger_quantity items of a category, get a reward.

    Superseded by offers, still honoured for clients that send deal_id.
    """
    __tablename__ = 'deals'

    id = Column(String(36), primary_key=True, default=generate_uuid)
    foodtruck_id = Column(String(36), ForeignKey('foodtrucks.id', ondelete='CASCADE'), nullable=False)
    name = Column(String, nullable=False)
    is_active = Column(Boolean, nullable=False, default=True)
    trigger_category_id = Column(String(36), ForeignKey('categories.id', ondelete='SET NULL'), nullable=True)
    trigger_quantity = Column(Integer, nullable=False, default=1)
    reward_type = Column(SQLEnum(DealRewardType), nullable=False)
    reward_value = Column(Integer, nullable=True)  # percent or cents
    reward_item_id = Column(String(36), ForeignKey('menu_items.id', ondelete='SET NULL'), nullable=True)
    times_used = Column(Integer, nullable=False, default=0)
    total_discount_given_cents = Column(Integer, nullable=False, default=0)


class DealUse(Base):
    __tablename__ = 'deal_uses'

    id = Column(String(36), primary_key=True, default=generate_uuid)
    deal_id = Column(String(36), ForeignKey('deals.id', ondelete='CASCADE'), nullable=False)
    order_id = Column(String(36), ForeignKey('orders.id', ondelete='CASCADE'), nullable=False)
    customer_email = Column(String, nullable=False)
    discount_applied_cents = Column(Integer, nullable=False)
    free_item_name = Column(String, nullable=True)
    used_at = Column(DateTime, default=func.now())


class DealDTO(BaseModel):
    id: str | None = None
    foodtruck_id: str | None = None
    name: str | None = None
    is_active: bool | None = None
    trigger_category_id: str | None = None
    trigger_category_name: str | None = None  # joined from categories
    trigger_quantity: int = 1
    reward_type: DealRewardType | None = None
    reward_value: int | None = None
    reward_item_id: str | None = None
    times_used: int = 0
    total_discount_given_cents: int = 0


class ValidatedDealDTO(BaseModel):
    """Outcome of the legacy deal check, consumed by the ledger step."""
    deal_id: str
    discount_cents: int
    is_offer: bool = False  # id resolved against the offers table
