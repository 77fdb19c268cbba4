from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import Session

from db import session_execute
from models.foodtruck import Foodtruck, FoodtruckDTO


class FoodtruckRepository:
    @staticmethod
    async def get_active_by_id(foodtruck_id: str, session: Session | AsyncSession) -> FoodtruckDTO | None:
        stmt = select(Foodtruck).where(Foodtruck.id == foodtruck_id, Foodtruck.is_active == True)
        result = await session_execute(stmt, session)
        foodtruck = result.scalar()
        if foodtruck is not None:
            return FoodtruckDTO.model_validate(foodtruck, from_attributes=True)
        else:
            return None
