import logging
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ValidationError
from sqlalchemy import Column, String, Integer, Boolean, DateTime, ForeignKey, JSON, CheckConstraint, Index, func
from sqlalchemy import Enum as SQLEnum

from enums.offer_type import OfferType
from models.base import Base, generate_uuid
from models.offer_config import OfferConfig, parse_offer_config

logger = logging.getLogger(__name__)


class Offer(Base):
    __tablename__ = 'offers'

    id = Column(String(36), primary_key=True, default=generate_uuid)
    foodtruck_id = Column(String(36), ForeignKey('foodtrucks.id', ondelete='CASCADE'), nullable=False)
    name = Column(String, nullable=False)
    description = Column(String, nullable=True)
    offer_type = Column(SQLEnum(OfferType), nullable=False)
    config = Column(JSON, nullable=False, default=dict)
    is_active = Column(Boolean, nullable=False, default=True)

    # Validity window
    start_date = Column(DateTime, nullable=True)
    end_date = Column(DateTime, nullable=True)
    time_start = Column(String(5), nullable=True)  # "HH:MM"
    time_end = Column(String(5), nullable=True)
    days_of_week = Column(JSON, nullable=True)  # 0 = Sunday ... 6 = Saturday

    # Usage counters
    max_uses = Column(Integer, nullable=True)
    max_uses_per_customer = Column(Integer, nullable=True)
    current_uses = Column(Integer, nullable=False, default=0)
    total_discount_given_cents = Column(Integer, nullable=False, default=0)

    __table_args__ = (
        CheckConstraint('current_uses >= 0', name='check_offer_current_uses_non_negative'),
        Index('ix_offers_foodtruck_id', 'foodtruck_id'),
    )


class OfferUse(Base):
    __tablename__ = 'offer_uses'

    id = Column(String(36), primary_key=True, default=generate_uuid)
    offer_id = Column(String(36), ForeignKey('offers.id', ondelete='CASCADE'), nullable=False)
    order_id = Column(String(36), ForeignKey('orders.id', ondelete='CASCADE'), nullable=False)
    customer_email = Column(String, nullable=False)
    discount_amount_cents = Column(Integer, nullable=False, default=0)
    free_item_name = Column(String, nullable=True)
    used_at = Column(DateTime, default=func.now())


class OfferDTO(BaseModel):
    id: str | None = None
    foodtruck_id: str | None = None
    name: str | None = None
    description: str | None = None
    offer_type: OfferType | None = None
    config: dict[str, Any] | None = None
    is_active: bool | None = None
    start_date: datetime | None = None
    end_date: datetime | None = None
    time_start: str | None = None
    time_end: str | None = None
    days_of_week: list[int] | None = None
    max_uses: int | None = None
    max_uses_per_customer: int | None = None
    current_uses: int = 0
    total_discount_given_cents: int = 0

    def parsed_config(self) -> OfferConfig | None:
        """
        Typed view of the stored config document.

        Returns None (and logs) when the document does not match its offer type.
        """
        if self.offer_type is None:
            return None
        try:
            return parse_offer_config(self.offer_type, self.config or {})
        except ValidationError as e:
            logger.warning(f"[Offer] Malformed config for offer {self.id} ({self.offer_type.value}): {e.error_count()} error(s)")
            return None
