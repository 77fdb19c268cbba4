from datetime import datetime

from sqlalchemy import select, delete, func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import Session

from db import session_execute, session_flush
from enums.order_status import OrderStatus
from models.order import Order, OrderDTO


class OrderRepository:
    @staticmethod
    async def create(order_dto: OrderDTO, session: Session | AsyncSession) -> str:
        """Insert an order row and return its generated id (not committed)."""
        order = Order(**order_dto.model_dump(exclude_none=True))
        session.add(order)
        await session_flush(session)
        return order.id

    @staticmethod
    async def get_by_id(order_id: str, session: Session | AsyncSession) -> OrderDTO | None:
        stmt = select(Order).where(Order.id == order_id)
        result = await session_execute(stmt, session)
        order = result.scalar()
        if order is not None:
            return OrderDTO.model_validate(order, from_attributes=True)
        else:
            return None

    @staticmethod
    async def delete_by_id(order_id: str, session: Session | AsyncSession) -> None:
        stmt = delete(Order).where(Order.id == order_id)
        await session_execute(stmt, session)

    @staticmethod
    async def count_in_slot(
        foodtruck_id: str,
        slot_start: datetime,
        slot_end: datetime,
        session: Session | AsyncSession
    ) -> int:
        """
        Count non-cancelled orders with pickup_time in [slot_start, slot_end).

        Args:
            foodtruck_id: Foodtruck whose slot is checked
            slot_start: Inclusive lower bound (naive UTC)
            slot_end: Exclusive upper bound (naive UTC)
            session: Database session
        """
        stmt = select(func.count(Order.id)).where(
            Order.foodtruck_id == foodtruck_id,
            Order.pickup_time >= slot_start,
            Order.pickup_time < slot_end,
            Order.status != OrderStatus.CANCELLED
        )
        result = await session_execute(stmt, session)
        return result.scalar_one()
