from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import Session

from db import session_execute
from models.category import Category
from models.deal import Deal, DealDTO, DealUse


class DealRepository:
    @staticmethod
    async def get_by_id(
        foodtruck_id: str,
        deal_id: str,
        session: Session | AsyncSession
    ) -> DealDTO | None:
        """Load a legacy deal together with its trigger category name."""
        stmt = (
            select(Deal, Category.name)
            .outerjoin(Category, Category.id == Deal.trigger_category_id)
            .where(Deal.id == deal_id, Deal.foodtruck_id == foodtruck_id)
        )
        result = await session_execute(stmt, session)
        row = result.first()
        if row is None:
            return None
        deal, category_name = row
        deal_dto = DealDTO.model_validate(deal, from_attributes=True)
        deal_dto.trigger_category_name = category_name
        return deal_dto

    @staticmethod
    async def apply(
        deal_id: str,
        order_id: str,
        customer_email: str,
        discount_applied_cents: int,
        free_item_name: str | None,
        session: Session | AsyncSession
    ) -> None:
        session.add(DealUse(
            deal_id=deal_id,
            order_id=order_id,
            customer_email=customer_email,
            discount_applied_cents=discount_applied_cents,
            free_item_name=free_item_name
        ))
        stmt = (
            update(Deal)
            .where(Deal.id == deal_id)
            .values(
                times_used=Deal.times_used + 1,
                total_discount_given_cents=Deal.total_discount_given_cents + discount_applied_cents
            )
        )
        await session_execute(stmt, session)
