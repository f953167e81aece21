"""
Per-session order service.

Bundles the OrderState and ScreenFlowController of one customer and keeps
them in the signed Flask cookie session between requests.

Lifecycle (per request):
    1. OrderSession.load() rebuilds both objects from flask.session
    2. Route handlers select items / dispatch events
    3. Every OrderState mutation is written back through a subscription;
       dispatch() also writes back the screen and history

Storage format (session["order"]):
    {
        "selections": {"entree": "cauliflower", "side_dish": null, ...},
        "flow": {"screen": "SIDE_DISH", "history": ["START", "ENTREE"]}
    }

Usage:
    order_session = OrderSession.load(session, catalog, tax_rate)
    order_session.select(item)
    screen = order_session.dispatch(FlowEvent.NEXT)
"""

from __future__ import annotations

import uuid
from decimal import Decimal
from typing import Any, Dict, MutableMapping, Optional

from core.order_state import OrderState, TAX_RATE
from core.screen_flow import FlowEvent, Screen, ScreenFlowController
from models.menu import MenuItem
from modules.catalog import MenuCatalog
from logging_config import SESSION_ID_KEY, get_logger, get_session_logger


# Module logger
logger = get_logger(__name__)

ORDER_KEY = "order"


class OrderSession:
    """
    One customer's ordering session.

    The shell constructs exactly one OrderState and one ScreenFlowController
    per session and passes this bundle to every screen handler.
    """

    def __init__(
        self,
        store: MutableMapping[str, Any],
        catalog: MenuCatalog,
        order: OrderState,
        flow: ScreenFlowController,
        session_id: str,
    ):
        self.store = store
        self.catalog = catalog
        self.order = order
        self.flow = flow
        self.session_id = session_id
        self.log = get_session_logger(session_id)

        self._unsubscribe = order.subscribe(lambda _order: self.save())

    @classmethod
    def load(
        cls,
        store: MutableMapping[str, Any],
        catalog: MenuCatalog,
        tax_rate: Decimal = TAX_RATE,
    ) -> "OrderSession":
        """
        Rebuild the session's order and flow from storage.

        A missing or corrupt entry starts a fresh order on the start screen.

        Args:
            store: Flask session (or any mutable mapping in tests)
            catalog: Menu catalog to resolve stored item ids
            tax_rate: Tax rate for the order

        Returns:
            OrderSession bound to store
        """
        session_id = store.get(SESSION_ID_KEY)
        if not session_id:
            session_id = uuid.uuid4().hex
            store[SESSION_ID_KEY] = session_id
            logger.info(f"New ordering session: {session_id[:8]}")

        data: Dict[str, Any] = store.get(ORDER_KEY) or {}
        order = OrderState.from_dict(data.get("selections", {}), catalog, tax_rate=tax_rate)

        try:
            flow = ScreenFlowController.from_dict(data.get("flow", {}), order)
        except ValueError as e:
            logger.warning(f"Discarding corrupt flow state, restarting order: {e}")
            order = OrderState(tax_rate=tax_rate)
            flow = ScreenFlowController(order)

        order_session = cls(store, catalog, order, flow, session_id)
        order_session.save()
        return order_session

    # -------------------------------------------------------------------------
    # Operations used by the route handlers
    # -------------------------------------------------------------------------

    @property
    def current_screen(self) -> Screen:
        return self.flow.current_screen

    def dispatch(self, event: FlowEvent) -> Screen:
        """Dispatch a navigation event and persist the new screen."""
        previous = self.flow.current_screen
        screen = self.flow.dispatch(event)
        self.save()
        self.log.info(f"{previous.name} -> {screen.name} ({event.name})")
        return screen

    def select(self, item: MenuItem) -> None:
        """Store item as the selection for its category (saved via subscription)."""
        self.order.select(item)
        self.log.info(f"Selected {item.category.value}: {item.name} ({item.price})")

    def find_item(self, item_id: Optional[str]) -> Optional[MenuItem]:
        """Resolve an item id from a form against the current screen's category."""
        category = self.current_screen.menu_category
        if not item_id or category is None:
            return None
        return self.catalog.get_item(category, item_id)

    def save(self) -> None:
        """Write order selections and flow state back to the store."""
        self.store[ORDER_KEY] = {
            "selections": self.order.to_dict(),
            "flow": self.flow.to_dict(),
        }
        # Flask session does not notice nested changes on its own
        if hasattr(self.store, "modified"):
            self.store.modified = True

    def close(self) -> None:
        """Detach from the order's change notifications."""
        self._unsubscribe()

    # -------------------------------------------------------------------------
    # Rendering helpers
    # -------------------------------------------------------------------------

    def summary(self) -> Dict[str, Any]:
        """JSON-friendly snapshot of the session for the API and templates."""
        return {
            "screen": self.current_screen.name,
            "can_navigate_back": self.flow.can_navigate_back,
            "selections": {
                category.value: (item.to_dict() if item else None)
                for category, item in self.order.selections().items()
            },
            "totals": self.order.get_totals().to_dict(),
        }
