from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import Session

from exceptions.item import UnknownItemException, ItemUnavailableException
from models.menu_item import MenuItemSnapshot
from models.order_request import CartLine
from repositories.menu_item import MenuItemRepository


class MenuService:

    @staticmethod
    async def load_snapshot(
        foodtruck_id: str,
        lines: list[CartLine],
        session: Session | AsyncSession
    ) -> dict[str, MenuItemSnapshot]:
        """
        Load the menu items referenced by the cart and check they can be ordered.

        Runs before any pricing so prices are never computed against another
        foodtruck's data.

        Returns:
            Snapshots keyed by menu item id

        Raises:
            UnknownItemException: id absent from this foodtruck's menu
            ItemUnavailableException: item marked unavailable
        """
        requested_ids = list(dict.fromkeys(line.menu_item_id for line in lines))
        menu_items = await MenuItemRepository.get_by_ids(foodtruck_id, requested_ids, session)
        snapshot = {item.id: item for item in menu_items}

        for menu_item_id in requested_ids:
            menu_item = snapshot.get(menu_item_id)
            if menu_item is None:
                raise UnknownItemException(menu_item_id=menu_item_id)
            if not menu_item.is_available:
                raise ItemUnavailableException(menu_item_id=menu_item.id, name=menu_item.name)

        return snapshot
