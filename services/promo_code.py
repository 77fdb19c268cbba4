import logging
from datetime import datetime

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import Session

from enums.discount_type import DiscountType
from exceptions.promo_code import (
    PromoCodeInvalidException,
    PromoCodeInactiveException,
    PromoCodeNotYetActiveException,
    PromoCodeExpiredException,
    PromoCodeMinimumNotMetException,
    PromoCodeExhaustedException,
    PromoCodeAlreadyUsedException,
    PromoCodeDiscountMismatchException,
)
from models.promo_code import PromoCodeDTO
from repositories.promo_code import PromoCodeRepository
from utils.clock import utcnow
from utils.money import percentage_of, within_tolerance

logger = logging.getLogger(__name__)


class PromoCodeService:

    @staticmethod
    def compute_expected_discount(promo_code: PromoCodeDTO, subtotal_cents: int) -> int:
        """
        Discount a promo code grants on a subtotal.

        percentage: floor(subtotal * value / 100), capped at max_discount_cents
        fixed: value, never more than the subtotal
        """
        if promo_code.discount_type == DiscountType.PERCENTAGE:
            discount = percentage_of(subtotal_cents, promo_code.discount_value)
            if promo_code.max_discount_cents is not None and discount > promo_code.max_discount_cents:
                discount = promo_code.max_discount_cents
            return discount
        return min(promo_code.discount_value, subtotal_cents)

    @staticmethod
    async def validate(
        foodtruck_id: str,
        promo_code_id: str | None,
        customer_email: str,
        subtotal_cents: int,
        claimed_discount_cents: int,
        session: Session | AsyncSession,
        now: datetime | None = None
    ) -> int | None:
        """
        Check a promo code's eligibility and the discount claimed for it.

        Checks run in order and stop at the first failure: existence, active
        flag, validity window, minimum order, global and per-customer usage.
        The usage checks are advisory; PromoCodeRepository.apply enforces
        max_uses atomically at write time.

        Args:
            foodtruck_id: Foodtruck the code must belong to
            promo_code_id: Code id from the request (None = no code)
            customer_email: Matched case-insensitively against the usage ledger
            subtotal_cents: Server-computed subtotal
            claimed_discount_cents: Promo discount claimed by the client
            session: Database session
            now: Reference time as naive UTC

        Returns:
            None if no code was used, else the validated discount in cents
        """
        if not promo_code_id:
            return None

        now = now or utcnow()
        promo_code = await PromoCodeRepository.get_by_id(foodtruck_id, promo_code_id, session)
        if promo_code is None:
            raise PromoCodeInvalidException(promo_code_id=promo_code_id)
        if not promo_code.is_active:
            raise PromoCodeInactiveException(promo_code_id=promo_code_id)
        if promo_code.valid_from is not None and promo_code.valid_from > now:
            raise PromoCodeNotYetActiveException(promo_code_id=promo_code_id)
        if promo_code.valid_until is not None and promo_code.valid_until < now:
            raise PromoCodeExpiredException(promo_code_id=promo_code_id)
        if promo_code.min_order_amount_cents and subtotal_cents < promo_code.min_order_amount_cents:
            raise PromoCodeMinimumNotMetException(
                promo_code_id=promo_code_id,
                min_order_cents=promo_code.min_order_amount_cents,
                subtotal_cents=subtotal_cents
            )
        if promo_code.max_uses is not None and promo_code.current_uses >= promo_code.max_uses:
            raise PromoCodeExhaustedException(promo_code_id=promo_code_id, max_uses=promo_code.max_uses)
        if promo_code.max_uses_per_customer is not None:
            uses = await PromoCodeRepository.count_uses_by_customer(promo_code_id, customer_email, session)
            if uses >= promo_code.max_uses_per_customer:
                raise PromoCodeAlreadyUsedException(
                    promo_code_id=promo_code_id,
                    uses=uses,
                    max_uses_per_customer=promo_code.max_uses_per_customer
                )

        expected = PromoCodeService.compute_expected_discount(promo_code, subtotal_cents)
        if not within_tolerance(expected, claimed_discount_cents):
            raise PromoCodeDiscountMismatchException(
                promo_code_id=promo_code_id,
                expected_cents=expected,
                claimed_cents=claimed_discount_cents
            )

        logger.debug(f"[Promo] Code {promo_code.code} validated: {claimed_discount_cents} cents")
        return claimed_discount_cents
