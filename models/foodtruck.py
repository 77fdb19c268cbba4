from datetime import datetime

from pydantic import BaseModel
from sqlalchemy import Column, String, Boolean, Integer, DateTime, func, CheckConstraint

from models.base import Base, generate_uuid


class Foodtruck(Base):
    __tablename__ = 'foodtrucks'

    id = Column(String(36), primary_key=True, default=generate_uuid)
    name = Column(String, nullable=False)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, default=func.now())

    # Order intake
    auto_accept_orders = Column(Boolean, nullable=False, default=False)
    max_orders_per_slot = Column(Integer, nullable=True)  # NULL = unlimited

    # Loyalty programme
    loyalty_enabled = Column(Boolean, nullable=False, default=False)
    loyalty_points_per_euro = Column(Integer, nullable=False, default=0)
    loyalty_threshold = Column(Integer, nullable=True)  # points needed for one reward
    loyalty_reward_cents = Column(Integer, nullable=False, default=0)  # value of one reward

    __table_args__ = (
        CheckConstraint('loyalty_points_per_euro >= 0', name='check_loyalty_points_non_negative'),
        CheckConstraint('loyalty_reward_cents >= 0', name='check_loyalty_reward_non_negative'),
    )


class FoodtruckDTO(BaseModel):
    id: str | None = None
    name: str | None = None
    is_active: bool | None = None
    created_at: datetime | None = None
    auto_accept_orders: bool = False
    max_orders_per_slot: int | None = None
    loyalty_enabled: bool = False
    loyalty_points_per_euro: int = 0
    loyalty_threshold: int | None = None
    loyalty_reward_cents: int = 0
