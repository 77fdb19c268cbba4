import logging

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import Session

import config
from models.foodtruck import FoodtruckDTO
from repositories.customer import CustomerRepository

logger = logging.getLogger(__name__)


class LoyaltyService:

    @staticmethod
    def compute_reward_discount(foodtruck: FoodtruckDTO, use_reward: bool, reward_count: int) -> int:
        """Discount (cents) for redeemed rewards: reward value x number of rewards."""
        if not use_reward or reward_count <= 0:
            return 0
        return foodtruck.loyalty_reward_cents * reward_count

    @staticmethod
    def compute_points(total_cents: int, points_per_euro: int) -> int:
        """Points earned for a paid amount, rounded down."""
        return (total_cents * points_per_euro) // 100

    @staticmethod
    async def redeem_reward(
        foodtruck: FoodtruckDTO,
        customer_id: str,
        order_id: str,
        reward_count: int,
        session: Session | AsyncSession
    ) -> bool:
        """
        Debit loyalty_threshold points per redeemed reward.

        Returns:
            True when points were debited
        """
        if not foodtruck.loyalty_threshold:
            logger.info(f"[Loyalty] Foodtruck {foodtruck.id} has no loyalty threshold, redemption skipped")
            return False
        count = reward_count or 1
        points = foodtruck.loyalty_threshold * count
        redeemed = await CustomerRepository.redeem_points(customer_id, order_id, points, session)
        if redeemed:
            logger.info(f"[Loyalty] Redeemed {count} reward(s) ({points} points) for customer {customer_id}")
        else:
            logger.warning(f"[Loyalty] Customer {customer_id} balance below {points} points, nothing redeemed")
        return redeemed

    @staticmethod
    async def credit_points(
        foodtruck: FoodtruckDTO,
        order_id: str,
        customer_email: str,
        total_cents: int,
        session: Session | AsyncSession
    ) -> int:
        """
        Credit points for a confirmed order.

        Only customers who opted in to the loyalty programme are credited.
        Anonymous counter orders never are.

        Returns:
            Points credited (0 when skipped)
        """
        email = customer_email.strip().lower()
        if not email or email == config.ANONYMOUS_CUSTOMER_EMAIL:
            logger.debug("[Loyalty] Anonymous order, no points credited")
            return 0

        customer = await CustomerRepository.get_by_email(foodtruck.id, email, session)
        if customer is None:
            logger.info(f"[Loyalty] No customer for {email} at foodtruck {foodtruck.id}, no points credited")
            return 0
        if not customer.loyalty_opt_in:
            logger.info(f"[Loyalty] Customer {email} has not opted in, no points credited")
            return 0

        points = LoyaltyService.compute_points(total_cents, foodtruck.loyalty_points_per_euro)
        if points <= 0:
            return 0
        await CustomerRepository.credit_points(customer.id, order_id, points, session)
        logger.info(f"[Loyalty] Credited {points} points to {email} for order {order_id}")
        return points
