from datetime import datetime

from pydantic import BaseModel
from sqlalchemy import Column, String, Integer, DateTime, ForeignKey, func
from sqlalchemy import Enum as SQLEnum

from enums.loyalty_transaction_type import LoyaltyTransactionType
from models.base import Base, generate_uuid


class LoyaltyTransaction(Base):
    __tablename__ = 'loyalty_transactions'

    id = Column(String(36), primary_key=True, default=generate_uuid)
    customer_id = Column(String(36), ForeignKey('customers.id', ondelete='CASCADE'), nullable=False)
    order_id = Column(String(36), ForeignKey('orders.id', ondelete='SET NULL'), nullable=True)
    transaction_type = Column(SQLEnum(LoyaltyTransactionType), nullable=False)
    points = Column(Integer, nullable=False)  # signed: earn > 0, redeem < 0
    created_at = Column(DateTime, default=func.now())


class LoyaltyTransactionDTO(BaseModel):
    id: str | None = None
    customer_id: str | None = None
    order_id: str | None = None
    transaction_type: LoyaltyTransactionType | None = None
    points: int | None = None
    created_at: datetime | None = None
