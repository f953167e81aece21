"""
Menu data models.

These models represent the static lunch menu and the derived order totals
shown on the checkout screen.

Thread Safety:
    - MenuItem is frozen (immutable), created once from the catalog
    - OrderTotals is frozen, computed fresh on every read
"""

from __future__ import annotations

from dataclasses import dataclass, asdict
from decimal import Decimal, ROUND_HALF_UP
from enum import Enum
from typing import Dict, Any, Union


class MenuCategory(Enum):
    """
    The three menu categories, in wizard order.
    """

    ENTREE = "entree"
    """Main dish, chosen first."""

    SIDE_DISH = "side_dish"
    """Side dish, chosen second."""

    ACCOMPANIMENT = "accompaniment"
    """Accompaniment, chosen last."""


@dataclass(frozen=True)
class MenuItem:
    """
    A single item on the menu.

    Belongs to exactly one category and never changes during a session.
    """

    id: str
    """Stable slug used in forms and session storage."""

    name: str
    """Display label."""

    description: str
    """Short description shown under the name."""

    price: Decimal
    """Non-negative price in the configured currency."""

    calories: int
    """Calorie count shown on the menu screen."""

    category: MenuCategory
    """Menu category this item belongs to."""

    def __post_init__(self):
        if not isinstance(self.price, Decimal):
            object.__setattr__(self, "price", Decimal(str(self.price)))
        if self.price < 0:
            raise ValueError(f"Menu item {self.name!r} has negative price {self.price}")

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-friendly dictionary."""
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "price": str(self.price),
            "calories": self.calories,
            "category": self.category.value,
        }


@dataclass(frozen=True)
class OrderTotals:
    """
    Derived totals for the current order.
    """

    item_total: Decimal
    """Sum of the selected items' prices."""

    tax: Decimal
    """item_total * tax rate."""

    grand_total: Decimal
    """item_total + tax."""

    def to_dict(self) -> Dict[str, str]:
        """Convert to dictionary with string amounts (no float drift)."""
        return {key: str(value) for key, value in asdict(self).items()}


def format_price(amount: Union[Decimal, int, float, str], currency_symbol: str = "$") -> str:
    """
    Format an amount for display, rounded to cents.

    Example:
        >>> format_price(Decimal("0.6"))
        '$0.60'
    """
    cents = Decimal(str(amount)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    return f"{currency_symbol}{cents:,}"
