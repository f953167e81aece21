"""
Custom exceptions for LunchTrayWeb.

Exception Hierarchy:
    LunchTrayError (base)
    ├── OrderFlowError          - Wizard wiring error (programmer error, fail fast)
    │   ├── InvalidTransitionError - Event not legal for the current screen
    │   └── InvalidCategoryError   - Item submitted for the wrong menu category
    └── CatalogError            - Menu catalog missing or malformed (startup failure)

Usage:
    Startup errors (CatalogError) cause the app to fail fast.
    OrderFlowError subclasses indicate a UI wiring bug. They are never
    retried; the web shell logs them and sends the user back to the
    current screen.
"""

from typing import Optional, Dict, Any


class LunchTrayError(Exception):
    """
    Base exception for all LunchTrayWeb errors.

    All custom exceptions inherit from this class, allowing callers to catch
    all application-specific errors with a single except clause if needed.
    """

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        """
        Initialize the exception.

        Args:
            message: Human-readable error message
            details: Optional dictionary with additional context for debugging
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


# =============================================================================
# FLOW ERRORS - Programmer/integration errors, surfaced immediately
# =============================================================================

class OrderFlowError(LunchTrayError):
    """
    Base class for ordering-wizard wiring errors.

    A correctly wired shell never triggers these through normal user
    interaction. The state they guard is left untouched when raised.
    """


class InvalidTransitionError(OrderFlowError):
    """
    A navigation event was dispatched on a screen that does not accept it.

    Example: NEXT on the start screen, or START while already ordering.
    """

    def __init__(self, screen: Any, event: Any):
        screen_name = getattr(screen, "name", str(screen))
        event_name = getattr(event, "name", str(event))
        message = f"Event {event_name} is not allowed on screen {screen_name}"
        details = {
            "screen": screen_name,
            "event": event_name,
        }
        super().__init__(message, details)
        self.screen = screen
        self.event = event


class InvalidCategoryError(OrderFlowError):
    """
    A menu item was submitted as a selection for another category.

    Example: a side dish passed to update_entree().
    """

    def __init__(self, item: Any, expected: Any):
        item_category = getattr(item, "category", None)
        expected_name = getattr(expected, "name", str(expected))
        actual_name = getattr(item_category, "name", str(item_category))
        message = (
            f"Menu item {getattr(item, 'name', item)!r} is a {actual_name}, "
            f"expected {expected_name}"
        )
        details = {
            "item_id": getattr(item, "id", None),
            "expected": expected_name,
            "actual": actual_name,
        }
        super().__init__(message, details)
        self.item = item
        self.expected = expected


# =============================================================================
# STARTUP ERRORS - Application will not start if these occur
# =============================================================================

class CatalogError(LunchTrayError):
    """
    The menu catalog could not be loaded.

    Typical causes:
    - MENU_CATALOG_PATH points to a missing file
    - File is not valid JSON
    - Unknown category, duplicate item id, or negative price
    """

    def __init__(self, message: str, path: Optional[str] = None):
        details = {}
        if path:
            details["path"] = path
            details["resolution"] = "Check MENU_CATALOG_PATH in .env or unset it to use the built-in menu"
        super().__init__(message, details)
        self.path = path
