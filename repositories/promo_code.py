import logging

from sqlalchemy import select, update, func, or_
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import Session

from db import session_execute
from models.promo_code import PromoCode, PromoCodeDTO, PromoCodeUse

logger = logging.getLogger(__name__)


class PromoCodeRepository:
    @staticmethod
    async def get_by_id(
        foodtruck_id: str,
        promo_code_id: str,
        session: Session | AsyncSession
    ) -> PromoCodeDTO | None:
        stmt = select(PromoCode).where(PromoCode.id == promo_code_id, PromoCode.foodtruck_id == foodtruck_id)
        result = await session_execute(stmt, session)
        promo_code = result.scalar()
        if promo_code is not None:
            return PromoCodeDTO.model_validate(promo_code, from_attributes=True)
        else:
            return None

    @staticmethod
    async def count_uses_by_customer(
        promo_code_id: str,
        customer_email: str,
        session: Session | AsyncSession
    ) -> int:
        """Number of ledger rows for this code and e-mail (case-insensitive)."""
        stmt = select(func.count(PromoCodeUse.id)).where(
            PromoCodeUse.promo_code_id == promo_code_id,
            func.lower(PromoCodeUse.customer_email) == customer_email.strip().lower()
        )
        result = await session_execute(stmt, session)
        return result.scalar_one()

    @staticmethod
    async def apply(
        promo_code_id: str,
        order_id: str,
        customer_email: str,
        discount_applied_cents: int,
        session: Session | AsyncSession
    ) -> bool:
        """
        Consume one use of a promo code and record it in the usage ledger.

        The increment is a single conditional UPDATE, so max_uses holds even when
        two orders pass validation concurrently.

        Returns:
            False if the code was already exhausted (nothing recorded)
        """
        stmt = (
            update(PromoCode)
            .where(
                PromoCode.id == promo_code_id,
                or_(PromoCode.max_uses.is_(None), PromoCode.current_uses < PromoCode.max_uses)
            )
            .values(current_uses=PromoCode.current_uses + 1)
        )
        result = await session_execute(stmt, session)
        if result.rowcount == 0:
            return False
        session.add(PromoCodeUse(
            promo_code_id=promo_code_id,
            order_id=order_id,
            customer_email=customer_email,
            discount_applied_cents=discount_applied_cents
        ))
        return True
