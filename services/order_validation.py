import logging
from datetime import datetime, timedelta

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import Session

from exceptions.order import MissingRequiredFieldException, PickupInPastException, SlotFullException
from models.order_request import CreateOrderRequest
from repositories.order import OrderRepository
from utils.clock import utcnow, to_naive_utc

logger = logging.getLogger(__name__)

# Clock skew accepted between the client and the server
PICKUP_TOLERANCE = timedelta(seconds=60)

REQUIRED_FIELDS = ('foodtruck_id', 'customer_email', 'customer_name', 'pickup_time', 'items', 'total_amount_cents')


class OrderValidationService:
    """Request-shape and scheduling guards that run before any pricing."""

    @staticmethod
    def validate_required_fields(request: CreateOrderRequest) -> None:
        """
        Raises:
            MissingRequiredFieldException: listing every missing field
        """
        missing = []
        for field_name in REQUIRED_FIELDS:
            value = getattr(request, field_name)
            if value is None or (isinstance(value, (str, list)) and len(value) == 0):
                missing.append(field_name)
        if missing:
            raise MissingRequiredFieldException(fields=missing)

    @staticmethod
    def validate_pickup_time(pickup_time: datetime, now: datetime | None = None) -> None:
        """
        Reject a pickup time more than PICKUP_TOLERANCE before now.

        Args:
            pickup_time: Requested pickup (aware, or naive UTC)
            now: Reference time as naive UTC (defaults to the current time)

        Raises:
            PickupInPastException
        """
        now = now or utcnow()
        if to_naive_utc(pickup_time) < now - PICKUP_TOLERANCE:
            raise PickupInPastException(pickup_time=pickup_time.isoformat())

    @staticmethod
    async def check_slot_availability(
        foodtruck_id: str,
        pickup_time: datetime,
        max_orders_per_slot: int | None,
        session: Session | AsyncSession
    ) -> None:
        """
        Reject the order when its pickup slot already holds max_orders_per_slot orders.

        A slot is identified by its start minute. No limit (None or 0) means
        the check is skipped.

        Raises:
            SlotFullException
        """
        if not max_orders_per_slot:
            return
        slot_start = to_naive_utc(pickup_time).replace(second=0, microsecond=0)
        slot_end = slot_start + timedelta(minutes=1)
        current_orders = await OrderRepository.count_in_slot(foodtruck_id, slot_start, slot_end, session)
        if current_orders >= max_orders_per_slot:
            logger.info(f"[Order] Slot {slot_start.isoformat()} full for foodtruck {foodtruck_id} "
                        f"({current_orders}/{max_orders_per_slot})")
            raise SlotFullException(
                pickup_time=pickup_time.isoformat(),
                max_orders=max_orders_per_slot,
                current_orders=current_orders
            )
