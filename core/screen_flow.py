"""
Screen sequencing for the ordering wizard.

ScreenFlowController maps (current screen, navigation event) to the next
screen and decides when the order must be reset. It owns the navigation
history stack explicitly, so the flow can be driven and tested without any
UI runtime.

Flow:
    START --Start--> ENTREE --Next--> SIDE_DISH --Next--> ACCOMPANIMENT
          --Next--> CHECKOUT --Next (confirm)--> START

    CANCEL on any ordering screen returns to START and resets the order.
    BACK_UP pops one screen off the history; it never resets the order.

The flow is cyclic: every completed or cancelled order returns to START,
ready for the next one.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Iterable, List, Optional, Tuple

from core.exceptions import InvalidTransitionError
from core.order_state import OrderState
from models.menu import MenuCategory
from logging_config import get_logger


# Module logger
logger = get_logger(__name__)


class Screen(Enum):
    """
    One step of the ordering wizard.

    The value is the translation key of the screen's title.
    """

    START = "app_name"
    ENTREE = "choose_entree"
    SIDE_DISH = "choose_side_dish"
    ACCOMPANIMENT = "choose_accompaniment"
    CHECKOUT = "order_checkout"

    @property
    def title_key(self) -> str:
        """Translation key of the screen title."""
        return f"screens.{self.value}"

    @property
    def menu_category(self) -> Optional[MenuCategory]:
        """Menu category chosen on this screen (None for START and CHECKOUT)."""
        return _MENU_SCREENS.get(self)


_MENU_SCREENS = {
    Screen.ENTREE: MenuCategory.ENTREE,
    Screen.SIDE_DISH: MenuCategory.SIDE_DISH,
    Screen.ACCOMPANIMENT: MenuCategory.ACCOMPANIMENT,
}


class FlowEvent(Enum):
    """Navigation events the hosting shell can dispatch."""

    START = "start"
    NEXT = "next"
    CANCEL = "cancel"
    BACK_UP = "back_up"


# (screen, event) -> (next screen, resets order)
_TRANSITIONS: Dict[Tuple[Screen, FlowEvent], Tuple[Screen, bool]] = {
    (Screen.START, FlowEvent.START): (Screen.ENTREE, False),
    (Screen.ENTREE, FlowEvent.NEXT): (Screen.SIDE_DISH, False),
    (Screen.ENTREE, FlowEvent.CANCEL): (Screen.START, True),
    (Screen.SIDE_DISH, FlowEvent.NEXT): (Screen.ACCOMPANIMENT, False),
    (Screen.SIDE_DISH, FlowEvent.CANCEL): (Screen.START, True),
    (Screen.ACCOMPANIMENT, FlowEvent.NEXT): (Screen.CHECKOUT, False),
    (Screen.ACCOMPANIMENT, FlowEvent.CANCEL): (Screen.START, True),
    (Screen.CHECKOUT, FlowEvent.NEXT): (Screen.START, True),
    (Screen.CHECKOUT, FlowEvent.CANCEL): (Screen.START, True),
}


class ScreenFlowController:
    """
    Deterministic state machine over Screen.

    Forward transitions push the screen being left onto the history stack.
    Transitions back to START reset the order and clear the history.
    Illegal (screen, event) pairs raise InvalidTransitionError and change
    nothing.

    Usage:
        order = OrderState()
        flow = ScreenFlowController(order)

        flow.dispatch(FlowEvent.START)   # -> Screen.ENTREE
        flow.dispatch(FlowEvent.NEXT)    # -> Screen.SIDE_DISH
        flow.dispatch(FlowEvent.BACK_UP) # -> Screen.ENTREE
        flow.dispatch(FlowEvent.CANCEL)  # -> Screen.START, order reset
    """

    def __init__(
        self,
        order: OrderState,
        initial: Screen = Screen.START,
        history: Iterable[Screen] = (),
    ):
        """
        Create a controller.

        Args:
            order: The session's OrderState (reset on cancel/confirm)
            initial: Screen to start on
            history: Screens already on the back stack, oldest first
        """
        self.order = order
        self._current = initial
        self._history: List[Screen] = list(history)

    @property
    def current_screen(self) -> Screen:
        return self._current

    @property
    def can_navigate_back(self) -> bool:
        """True iff the history stack is non-empty."""
        return bool(self._history)

    @property
    def history(self) -> Tuple[Screen, ...]:
        """Back stack, oldest first."""
        return tuple(self._history)

    def allowed_events(self) -> List[FlowEvent]:
        """Events that dispatch() accepts on the current screen."""
        events = [
            event for (screen, event) in _TRANSITIONS
            if screen is self._current
        ]
        if self._history:
            events.append(FlowEvent.BACK_UP)
        return events

    def dispatch(self, event: FlowEvent) -> Screen:
        """
        Advance the flow.

        Args:
            event: Navigation event from the hosting shell

        Returns:
            The screen to render

        Raises:
            InvalidTransitionError: Event not legal on the current screen
        """
        previous = self._current

        if event is FlowEvent.BACK_UP:
            if not self._history:
                logger.debug(f"{previous.name}: back requested with empty history, ignoring")
                return self._current
            self._current = self._history.pop()
            logger.debug(f"{previous.name} -> {self._current.name} (trigger: {event.name})")
            return self._current

        transition = _TRANSITIONS.get((self._current, event))
        if transition is None:
            raise InvalidTransitionError(self._current, event)

        target, resets_order = transition

        if not resets_order:
            self._history.append(previous)
            self._current = target
            logger.debug(f"{previous.name} -> {target.name} (trigger: {event.name})")
            return self._current

        # Listeners notified by reset() already see START with no history
        self._history.clear()
        self._current = target
        outcome = "confirmed" if event is FlowEvent.NEXT else "cancelled"
        logger.info(f"Order {outcome} on {previous.name}, returning to {target.name}")
        self.order.reset()
        return self._current

    # -------------------------------------------------------------------------
    # Session storage
    # -------------------------------------------------------------------------

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for session storage."""
        return {
            "screen": self._current.name,
            "history": [screen.name for screen in self._history],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any], order: OrderState) -> "ScreenFlowController":
        """
        Restore a controller from session storage.

        Args:
            data: Dictionary from ScreenFlowController.to_dict()
            order: The restored OrderState for the same session

        Raises:
            ValueError: Unknown screen name in data
        """
        data = data or {}
        try:
            initial = Screen[data.get("screen", Screen.START.name)]
            history = [Screen[name] for name in data.get("history", [])]
        except KeyError as e:
            raise ValueError(f"Unknown screen in session data: {e}") from e
        return cls(order, initial=initial, history=history)

    def __repr__(self) -> str:
        return f"ScreenFlowController(screen={self._current.name}, history={[s.name for s in self._history]})"
