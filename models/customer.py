from datetime import datetime

from pydantic import BaseModel
from sqlalchemy import Column, String, Integer, Boolean, DateTime, ForeignKey, CheckConstraint, Index

from models.base import Base, generate_uuid


class Customer(Base):
    __tablename__ = 'customers'

    id = Column(String(36), primary_key=True, default=generate_uuid)
    foodtruck_id = Column(String(36), ForeignKey('foodtrucks.id', ondelete='CASCADE'), nullable=False)
    email = Column(String, nullable=False)  # stored lower-cased
    name = Column(String, nullable=True)
    phone = Column(String, nullable=True)

    # Marketing consent
    email_opt_in = Column(Boolean, nullable=False, default=False)
    sms_opt_in = Column(Boolean, nullable=False, default=False)
    opted_in_at = Column(DateTime, nullable=True)

    # Loyalty (RGPD: points are only credited after an explicit opt-in)
    loyalty_opt_in = Column(Boolean, nullable=False, default=False)
    loyalty_opted_in_at = Column(DateTime, nullable=True)
    loyalty_points = Column(Integer, nullable=False, default=0)

    __table_args__ = (
        CheckConstraint('loyalty_points >= 0', name='check_loyalty_points_balance_non_negative'),
        Index('ix_customers_foodtruck_email', 'foodtruck_id', 'email', unique=True),
    )


class CustomerDTO(BaseModel):
    id: str | None = None
    foodtruck_id: str | None = None
    email: str | None = None
    name: str | None = None
    phone: str | None = None
    email_opt_in: bool = False
    sms_opt_in: bool = False
    opted_in_at: datetime | None = None
    loyalty_opt_in: bool = False
    loyalty_opted_in_at: datetime | None = None
    loyalty_points: int = 0
