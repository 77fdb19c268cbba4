from pydantic import BaseModel, ConfigDict
from sqlalchemy import Column, String, Integer, Boolean, ForeignKey

from models.base import Base, generate_uuid


class CategoryOption(Base):
    """
    Selectable choice (size or supplement) defined at category level.

    For size options price_modifier_cents is the full item price, for
    supplements it is the add-on amount.
    """
    __tablename__ = 'category_options'

    id = Column(String(36), primary_key=True, default=generate_uuid)
    category_id = Column(String(36), ForeignKey('categories.id', ondelete='CASCADE'), nullable=True)
    option_group_id = Column(String(36), nullable=True)
    name = Column(String, nullable=False)
    price_modifier_cents = Column(Integer, nullable=False, default=0)
    is_available = Column(Boolean, nullable=False, default=True)


class CategoryOptionSnapshot(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    price_modifier_cents: int = 0
    is_available: bool = True
