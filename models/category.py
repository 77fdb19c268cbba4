from pydantic import BaseModel
from sqlalchemy import Column, String, Integer, ForeignKey

from models.base import Base, generate_uuid


class Category(Base):
    __tablename__ = 'categories'

    id = Column(String(36), primary_key=True, default=generate_uuid)
    foodtruck_id = Column(String(36), ForeignKey('foodtrucks.id', ondelete='CASCADE'), nullable=False)
    name = Column(String, nullable=False)
    display_order = Column(Integer, nullable=False, default=0)


class CategoryDTO(BaseModel):
    id: str | None = None
    foodtruck_id: str | None = None
    name: str | None = None
    display_order: int | None = None
