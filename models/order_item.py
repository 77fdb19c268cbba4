from pydantic import BaseModel
from sqlalchemy import Column, String, Integer, Boolean, ForeignKey, CheckConstraint
from sqlalchemy.orm import relationship

from models.base import Base, generate_uuid


class OrderItem(Base):
    __tablename__ = 'order_items'

    id = Column(String(36), primary_key=True, default=generate_uuid)
    order_id = Column(String(36), ForeignKey('orders.id', ondelete='CASCADE'), nullable=False)
    menu_item_id = Column(String(36), ForeignKey('menu_items.id', ondelete='SET NULL'), nullable=True)
    quantity = Column(Integer, nullable=False)
    unit_price_cents = Column(Integer, nullable=False)  # resolved server-side
    notes = Column(String, nullable=True)

    order = relationship('Order', back_populates='items')
    options = relationship('OrderItemOption', back_populates='order_item', cascade='all, delete-orphan')

    __table_args__ = (
        CheckConstraint('quantity >= 1', name='check_order_item_quantity_positive'),
        CheckConstraint('unit_price_cents >= 0', name='check_order_item_unit_price_non_negative'),
    )


class OrderItemOption(Base):
    """Snapshot of a selected option, immune to later menu edits."""
    __tablename__ = 'order_item_options'

    id = Column(String(36), primary_key=True, default=generate_uuid)
    order_item_id = Column(String(36), ForeignKey('order_items.id', ondelete='CASCADE'), nullable=False)
    option_id = Column(String(36), nullable=True)
    option_group_id = Column(String(36), nullable=True)
    option_name = Column(String, nullable=False)
    option_group_name = Column(String, nullable=True)
    price_modifier_cents = Column(Integer, nullable=False, default=0)
    is_size_option = Column(Boolean, nullable=False, default=False)

    order_item = relationship('OrderItem', back_populates='options')


class OrderItemDTO(BaseModel):
    id: str | None = None
    order_id: str | None = None
    menu_item_id: str | None = None
    quantity: int | None = None
    unit_price_cents: int | None = None
    notes: str | None = None


class OrderItemOptionDTO(BaseModel):
    id: str | None = None
    order_item_id: str | None = None
    option_id: str | None = None
    option_group_id: str | None = None
    option_name: str | None = None
    option_group_name: str | None = None
    price_modifier_cents: int = 0
    is_size_option: bool = False
