"""
Menu catalog.

Provides the static, ordered list of menu items per category. The catalog
is read-only configuration: it is built once at startup and handed to the
order sessions.

Sources:
- Built-in lunch menu (default_catalog)
- JSON file (load_catalog), selected with MENU_CATALOG_PATH

JSON shape:
    {
        "entree": [
            {"id": "cauliflower", "name": "Cauliflower",
             "description": "...", "price": "7.00", "calories": 300},
            ...
        ],
        "side_dish": [...],
        "accompaniment": [...]
    }
"""

import json
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple

from core.exceptions import CatalogError
from models.menu import MenuCategory, MenuItem
from logging_config import get_logger

logger = get_logger(__name__)


class MenuCatalog:
    """Ordered, read-only menu items grouped by category."""

    def __init__(self, items: Iterable[MenuItem]):
        """
        Build a catalog from menu items.

        Args:
            items: Menu items in display order (any category mix)

        Raises:
            CatalogError: If two items share an id
        """
        self._by_category: Dict[MenuCategory, Tuple[MenuItem, ...]] = {}
        self._by_id: Dict[str, MenuItem] = {}

        grouped: Dict[MenuCategory, List[MenuItem]] = {c: [] for c in MenuCategory}
        for item in items:
            if item.id in self._by_id:
                raise CatalogError(f"Duplicate menu item id: {item.id}")
            self._by_id[item.id] = item
            grouped[item.category].append(item)

        for category, category_items in grouped.items():
            self._by_category[category] = tuple(category_items)

    def items(self, category: MenuCategory) -> Tuple[MenuItem, ...]:
        """Items of one category, in display order."""
        return self._by_category[category]

    def get_item(self, category: MenuCategory, item_id: str) -> Optional[MenuItem]:
        """
        Look up an item by id within a category.

        Returns None when the id is unknown or belongs to another category.
        """
        item = self._by_id.get(item_id)
        if item is None or item.category is not category:
            return None
        return item

    def find(self, item_id: str) -> Optional[MenuItem]:
        """Look up an item by id in any category."""
        return self._by_id.get(item_id)

    def __len__(self) -> int:
        return len(self._by_id)


def _item(item_id, name, description, price, calories, category) -> MenuItem:
    return MenuItem(
        id=item_id,
        name=name,
        description=description,
        price=Decimal(price),
        calories=calories,
        category=category,
    )


def default_catalog() -> MenuCatalog:
    """The built-in lunch menu."""
    entree = MenuCategory.ENTREE
    side = MenuCategory.SIDE_DISH
    accompaniment = MenuCategory.ACCOMPANIMENT

    return MenuCatalog([
        _item("cauliflower", "Cauliflower",
              "Whole cauliflower, brined, roasted, and deep fried",
              "7.00", 300, entree),
        _item("three-bean-chili", "Three Bean Chili",
              "Black beans, red beans, kidney beans, slow cooked, topped with onion",
              "4.00", 250, entree),
        _item("mushroom-pasta", "Mushroom Pasta",
              "Penne pasta, mushrooms, basil, with plum tomatoes cooked in garlic and olive oil",
              "5.50", 950, entree),
        _item("spicy-black-bean-skillet", "Spicy Black Bean Skillet",
              "Seasonal vegetables, black beans, house spice blend, served with avocado and quick pickled onions",
              "5.50", 700, entree),
        _item("summer-salad", "Summer Salad",
              "Heirloom tomatoes, butter lettuce, peaches, avocado, balsamic dressing",
              "2.50", 50, side),
        _item("butternut-squash-soup", "Butternut Squash Soup",
              "Roasted butternut squash, roasted peppers, chili oil",
              "3.00", 400, side),
        _item("spicy-potatoes", "Spicy Potatoes",
              "Marble potatoes, roasted, and fried in house spice blend",
              "2.00", 800, side),
        _item("coconut-rice", "Coconut Rice",
              "Rice, coconut milk, lime, and sugar",
              "1.50", 500, side),
        _item("lunch-roll", "Lunch Roll",
              "Fresh baked roll made in house",
              "0.50", 100, accompaniment),
        _item("mixed-berries", "Mixed Berries",
              "Strawberry, blueberry, raspberry, and huckleberry",
              "1.00", 35, accompaniment),
        _item("pickled-veggies", "Pickled Veggies",
              "Pickled cucumbers and carrots, made in house",
              "0.50", 0, accompaniment),
    ])


def load_catalog(path: Path) -> MenuCatalog:
    """
    Load a catalog from a JSON file.

    Args:
        path: Path to the catalog JSON file

    Returns:
        MenuCatalog with the file's items in file order

    Raises:
        CatalogError: File missing, invalid JSON, unknown category,
            malformed item, negative price, or duplicate id
    """
    path = Path(path)
    if not path.exists():
        raise CatalogError(f"Menu catalog not found: {path}", str(path))

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise CatalogError(f"Menu catalog is not valid JSON: {e}", str(path)) from e

    if not isinstance(data, dict):
        raise CatalogError("Menu catalog must be a JSON object keyed by category", str(path))

    items: List[MenuItem] = []
    for category_key, entries in data.items():
        try:
            category = MenuCategory(category_key)
        except ValueError as e:
            raise CatalogError(f"Unknown menu category: {category_key}", str(path)) from e

        if not isinstance(entries, list):
            raise CatalogError(f"Menu category {category_key} must be a list of items", str(path))

        for entry in entries:
            try:
                items.append(MenuItem(
                    id=str(entry["id"]),
                    name=entry["name"],
                    description=entry.get("description", ""),
                    price=Decimal(str(entry["price"])),
                    calories=int(entry.get("calories", 0)),
                    category=category,
                ))
            except (KeyError, TypeError, InvalidOperation, ValueError) as e:
                raise CatalogError(
                    f"Malformed {category_key} item {entry!r}: {e}", str(path)
                ) from e

    catalog = MenuCatalog(items)
    logger.info(f"Loaded {len(catalog)} menu items from {path}")
    return catalog
