"""
Core module for LunchTrayWeb.

Contains the UI-independent ordering logic:
- exceptions: Custom exception hierarchy
- order_state: Order accumulator (selections and derived totals)
- screen_flow: Wizard screens, navigation events and the flow controller
"""

from .exceptions import (
    LunchTrayError,
    OrderFlowError,
    InvalidTransitionError,
    InvalidCategoryError,
    CatalogError,
)
from .order_state import OrderState, TAX_RATE
from .screen_flow import Screen, FlowEvent, ScreenFlowController

__all__ = [
    "LunchTrayError",
    "OrderFlowError",
    "InvalidTransitionError",
    "InvalidCategoryError",
    "CatalogError",
    "OrderState",
    "TAX_RATE",
    "Screen",
    "FlowEvent",
    "ScreenFlowController",
]
