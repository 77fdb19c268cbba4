from pydantic import BaseModel, ConfigDict
from sqlalchemy import Column, String, Integer, Boolean, ForeignKey, CheckConstraint, Index

from models.base import Base, generate_uuid


class MenuItem(Base):
    __tablename__ = 'menu_items'

    id = Column(String(36), primary_key=True, default=generate_uuid)
    foodtruck_id = Column(String(36), ForeignKey('foodtrucks.id', ondelete='CASCADE'), nullable=False)
    category_id = Column(String(36), ForeignKey('categories.id', ondelete='SET NULL'), nullable=True)
    name = Column(String, nullable=False)
    description = Column(String, nullable=True)
    base_price_cents = Column(Integer, nullable=False)
    is_available = Column(Boolean, nullable=False, default=True)

    __table_args__ = (
        CheckConstraint('base_price_cents >= 0', name='check_base_price_non_negative'),
        Index('ix_menu_items_foodtruck_id', 'foodtruck_id'),
    )


class MenuItemSnapshot(BaseModel):
    """
    Read-only view of a menu item for the duration of one order request.

    Loaded fresh per request and never mutated by the engine.
    """
    model_config = ConfigDict(frozen=True)

    id: str
    foodtruck_id: str
    category_id: str | None = None
    name: str
    base_price_cents: int
    is_available: bool
