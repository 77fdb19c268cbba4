from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import Session

from db import session_execute
from models.category_option import CategoryOption, CategoryOptionSnapshot


class CategoryOptionRepository:
    @staticmethod
    async def get_by_ids(
        option_ids: list[str],
        session: Session | AsyncSession
    ) -> dict[str, CategoryOptionSnapshot]:
        """Batch-load category options, keyed by id."""
        if not option_ids:
            return {}
        stmt = select(CategoryOption).where(CategoryOption.id.in_(set(option_ids)))
        result = await session_execute(stmt, session)
        return {
            option.id: CategoryOptionSnapshot.model_validate(option, from_attributes=True)
            for option in result.scalars().all()
        }
