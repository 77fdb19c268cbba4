from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import Session

from db import session_execute
from models.offer import Offer, OfferDTO, OfferUse


class OfferRepository:
    @staticmethod
    async def get_by_ids(
        foodtruck_id: str,
        offer_ids: list[str],
        session: Session | AsyncSession
    ) -> list[OfferDTO]:
        if not offer_ids:
            return []
        stmt = select(Offer).where(Offer.foodtruck_id == foodtruck_id, Offer.id.in_(set(offer_ids)))
        result = await session_execute(stmt, session)
        return [OfferDTO.model_validate(offer, from_attributes=True) for offer in result.scalars().all()]

    @staticmethod
    async def get_by_id(
        foodtruck_id: str,
        offer_id: str,
        session: Session | AsyncSession
    ) -> OfferDTO | None:
        stmt = select(Offer).where(Offer.foodtruck_id == foodtruck_id, Offer.id == offer_id)
        result = await session_execute(stmt, session)
        offer = result.scalar()
        if offer is not None:
            return OfferDTO.model_validate(offer, from_attributes=True)
        else:
            return None

    @staticmethod
    async def add_use(
        offer_id: str,
        order_id: str,
        customer_email: str,
        discount_amount_cents: int,
        free_item_name: str | None,
        session: Session | AsyncSession
    ) -> None:
        session.add(OfferUse(
            offer_id=offer_id,
            order_id=order_id,
            customer_email=customer_email,
            discount_amount_cents=discount_amount_cents,
            free_item_name=free_item_name
        ))

    @staticmethod
    async def increment_usage(
        offer_id: str,
        count: int,
        discount_cents: int,
        session: Session | AsyncSession
    ) -> None:
        """Atomically bump current_uses and total_discount_given_cents."""
        stmt = (
            update(Offer)
            .where(Offer.id == offer_id)
            .values(
                current_uses=Offer.current_uses + count,
                total_discount_given_cents=Offer.total_discount_given_cents + discount_cents
            )
        )
        await session_execute(stmt, session)
