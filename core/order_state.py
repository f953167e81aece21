"""
Order accumulator.

Holds the entree, side dish and accompaniment chosen so far in one ordering
session and derives the subtotal, tax and total from them.

Totals are never stored: every read recomputes them from the three
selections, so they cannot drift from what is selected.

Change notification:
    Screens write selections; the hosting shell re-renders. Instead of
    exposing toolkit-specific observable state, OrderState calls every
    subscribed listener after each mutation.

Usage:
    order = OrderState()
    unsubscribe = order.subscribe(lambda o: render(o.get_totals()))

    order.update_entree(catalog.get_item(MenuCategory.ENTREE, "cauliflower"))
    totals = order.get_totals()

    order.reset()      # on cancel or confirmed checkout
    unsubscribe()
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Callable, Dict, List, Optional

from core.exceptions import InvalidCategoryError
from models.menu import MenuCategory, MenuItem, OrderTotals
from logging_config import get_logger


# Module logger
logger = get_logger(__name__)

TAX_RATE = Decimal("0.08")

OrderListener = Callable[["OrderState"], None]


class OrderState:
    """
    Per-session order accumulator.

    At most one item is held per category; selecting again replaces the
    previous choice.
    """

    def __init__(self, tax_rate: Decimal = TAX_RATE):
        """
        Create an empty order.

        Args:
            tax_rate: Fraction of the item total charged as tax
        """
        self.tax_rate = Decimal(str(tax_rate))
        self._selections: Dict[MenuCategory, Optional[MenuItem]] = {
            category: None for category in MenuCategory
        }
        self._listeners: List[OrderListener] = []

    # -------------------------------------------------------------------------
    # Selections
    # -------------------------------------------------------------------------

    @property
    def selected_entree(self) -> Optional[MenuItem]:
        return self._selections[MenuCategory.ENTREE]

    @property
    def selected_side_dish(self) -> Optional[MenuItem]:
        return self._selections[MenuCategory.SIDE_DISH]

    @property
    def selected_accompaniment(self) -> Optional[MenuItem]:
        return self._selections[MenuCategory.ACCOMPANIMENT]

    @property
    def is_empty(self) -> bool:
        """True when nothing has been selected."""
        return all(item is None for item in self._selections.values())

    def selections(self) -> Dict[MenuCategory, Optional[MenuItem]]:
        """Current selection per category, in wizard order."""
        return dict(self._selections)

    def update_entree(self, item: MenuItem) -> None:
        self._replace(MenuCategory.ENTREE, item)

    def update_side_dish(self, item: MenuItem) -> None:
        self._replace(MenuCategory.SIDE_DISH, item)

    def update_accompaniment(self, item: MenuItem) -> None:
        self._replace(MenuCategory.ACCOMPANIMENT, item)

    def select(self, item: MenuItem) -> None:
        """Store item as the selection for its own category."""
        self._replace(item.category, item)

    def reset(self) -> None:
        """
        Clear all three selections.

        Called once per completed or cancelled order, before the next
        order's first selection.
        """
        for category in self._selections:
            self._selections[category] = None
        logger.debug("Order reset")
        self._notify()

    def _replace(self, category: MenuCategory, item: MenuItem) -> None:
        if item.category is not category:
            raise InvalidCategoryError(item, category)

        previous = self._selections[category]
        self._selections[category] = item
        logger.debug(
            f"{category.value} selected: {item.id}"
            + (f" (replaces {previous.id})" if previous else "")
        )
        self._notify()

    # -------------------------------------------------------------------------
    # Totals
    # -------------------------------------------------------------------------

    def get_totals(self) -> OrderTotals:
        """
        Compute subtotal, tax and total from the current selections.

        Pure read: safe to call any number of times.
        """
        item_total = sum(
            (item.price for item in self._selections.values() if item is not None),
            Decimal("0"),
        )
        tax = item_total * self.tax_rate
        return OrderTotals(
            item_total=item_total,
            tax=tax,
            grand_total=item_total + tax,
        )

    # -------------------------------------------------------------------------
    # Observers
    # -------------------------------------------------------------------------

    def subscribe(self, listener: OrderListener) -> Callable[[], None]:
        """
        Register a listener called with this order after every mutation.

        Args:
            listener: Callable taking the OrderState

        Returns:
            Function that removes the listener again
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self)

    # -------------------------------------------------------------------------
    # Session storage
    # -------------------------------------------------------------------------

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert to dictionary for session storage.

        Only item ids are stored; totals are derived on load.
        """
        return {
            category.value: (item.id if item else None)
            for category, item in self._selections.items()
        }

    @classmethod
    def from_dict(
        cls,
        data: Dict[str, Any],
        catalog: Any,
        tax_rate: Decimal = TAX_RATE,
    ) -> "OrderState":
        """
        Restore an order from session storage.

        Args:
            data: Dictionary from OrderState.to_dict()
            catalog: MenuCatalog to resolve item ids against
            tax_rate: Tax rate for the restored order

        Returns:
            OrderState instance (no listeners attached)
        """
        order = cls(tax_rate=tax_rate)
        for category in MenuCategory:
            item_id = (data or {}).get(category.value)
            if not item_id:
                continue
            item = catalog.get_item(category, item_id)
            if item is None:
                logger.warning(f"Dropping unknown {category.value} from session: {item_id}")
                continue
            order._selections[category] = item
        return order

    def __repr__(self) -> str:
        chosen = ", ".join(
            f"{category.value}={item.id if item else None}"
            for category, item in self._selections.items()
        )
        return f"OrderState({chosen})"
