from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import Session

from db import session_execute
from models.menu_item import MenuItem, MenuItemSnapshot


class MenuItemRepository:
    """Read-only access to the menu, always scoped to one foodtruck."""

    @staticmethod
    async def get_by_ids(
        foodtruck_id: str,
        menu_item_ids: list[str],
        session: Session | AsyncSession
    ) -> list[MenuItemSnapshot]:
        """
        Batch-load menu items in a single query.

        Items belonging to another foodtruck are not returned, so a foreign id
        looks exactly like an unknown one to the caller.

        Args:
            foodtruck_id: Tenant the order is placed with
            menu_item_ids: Ids referenced by the cart (duplicates allowed)
            session: Database session

        Returns:
            List of MenuItemSnapshot (one per distinct existing id)
        """
        if not menu_item_ids:
            return []
        stmt = select(MenuItem).where(
            MenuItem.foodtruck_id == foodtruck_id,
            MenuItem.id.in_(set(menu_item_ids))
        )
        result = await session_execute(stmt, session)
        return [MenuItemSnapshot.model_validate(item, from_attributes=True) for item in result.scalars().all()]

    @staticmethod
    async def get_by_id(
        foodtruck_id: str,
        menu_item_id: str,
        session: Session | AsyncSession
    ) -> MenuItemSnapshot | None:
        stmt = select(MenuItem).where(MenuItem.foodtruck_id == foodtruck_id, MenuItem.id == menu_item_id)
        result = await session_execute(stmt, session)
        item = result.scalar()
        if item is not None:
            return MenuItemSnapshot.model_validate(item, from_attributes=True)
        else:
            return None
