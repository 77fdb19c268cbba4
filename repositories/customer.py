from typing import Any

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import Session

from db import session_execute
from enums.loyalty_transaction_type import LoyaltyTransactionType
from models.customer import Customer, CustomerDTO
from models.loyalty_transaction import LoyaltyTransaction


class CustomerRepository:
    @staticmethod
    async def get_by_email(
        foodtruck_id: str,
        email: str,
        session: Session | AsyncSession
    ) -> CustomerDTO | None:
        stmt = select(Customer).where(
            Customer.foodtruck_id == foodtruck_id,
            Customer.email == email.strip().lower()
        )
        result = await session_execute(stmt, session)
        customer = result.scalar()
        if customer is not None:
            return CustomerDTO.model_validate(customer, from_attributes=True)
        else:
            return None

    @staticmethod
    async def update_preferences(
        foodtruck_id: str,
        email: str,
        values: dict[str, Any],
        session: Session | AsyncSession
    ) -> int:
        """Update consent columns of an existing customer. Returns affected row count."""
        stmt = (
            update(Customer)
            .where(Customer.foodtruck_id == foodtruck_id, Customer.email == email.strip().lower())
            .values(**values)
        )
        result = await session_execute(stmt, session)
        return result.rowcount

    @staticmethod
    async def credit_points(
        customer_id: str,
        order_id: str,
        points: int,
        session: Session | AsyncSession
    ) -> None:
        stmt = (
            update(Customer)
            .where(Customer.id == customer_id)
            .values(loyalty_points=Customer.loyalty_points + points)
        )
        await session_execute(stmt, session)
        session.add(LoyaltyTransaction(
            customer_id=customer_id,
            order_id=order_id,
            transaction_type=LoyaltyTransactionType.EARN,
            points=points
        ))

    @staticmethod
    async def redeem_points(
        customer_id: str,
        order_id: str,
        points: int,
        session: Session | AsyncSession
    ) -> bool:
        """
        Debit loyalty points if the balance covers them.

        Returns:
            False when the balance is insufficient (nothing debited)
        """
        stmt = (
            update(Customer)
            .where(Customer.id == customer_id, Customer.loyalty_points >= points)
            .values(loyalty_points=Customer.loyalty_points - points)
        )
        result = await session_execute(stmt, session)
        if result.rowcount == 0:
            return False
        session.add(LoyaltyTransaction(
            customer_id=customer_id,
            order_id=order_id,
            transaction_type=LoyaltyTransactionType.REDEEM,
            points=-points
        ))
        return True
