from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import Session

from db import session_execute, session_flush
from models.order_item import OrderItem, OrderItemDTO, OrderItemOption, OrderItemOptionDTO


class OrderItemRepository:
    @staticmethod
    async def create_many(order_items: list[OrderItemDTO], session: Session | AsyncSession) -> list[str]:
        """Insert order lines and return their ids in input order."""
        rows = [OrderItem(**order_item_dto.model_dump(exclude_none=True)) for order_item_dto in order_items]
        session.add_all(rows)
        await session_flush(session)
        return [row.id for row in rows]

    @staticmethod
    async def create_options(options: list[OrderItemOptionDTO], session: Session | AsyncSession) -> None:
        session.add_all([OrderItemOption(**option_dto.model_dump(exclude_none=True)) for option_dto in options])
        await session_flush(session)

    @staticmethod
    async def get_by_order_id(order_id: str, session: Session | AsyncSession) -> list[OrderItemDTO]:
        stmt = select(OrderItem).where(OrderItem.order_id == order_id)
        result = await session_execute(stmt, session)
        return [OrderItemDTO.model_validate(order_item, from_attributes=True) for order_item in result.scalars().all()]

    @staticmethod
    async def get_options_by_order_item_ids(
        order_item_ids: list[str],
        session: Session | AsyncSession
    ) -> list[OrderItemOptionDTO]:
        if not order_item_ids:
            return []
        stmt = select(OrderItemOption).where(OrderItemOption.order_item_id.in_(order_item_ids))
        result = await session_execute(stmt, session)
        return [OrderItemOptionDTO.model_validate(option, from_attributes=True) for option in result.scalars().all()]
