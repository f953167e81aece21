"""
Navigation routes and helpers shared by the screen blueprints.

Handles:
- /back - Pop one screen off the wizard history (no order reset)

Helpers:
- get_order_session() - The request's OrderSession (built once per request)
- screen_url() - URL of the page that renders a Screen
- require_screen() - Redirect to the current screen if another one is requested
"""

from typing import Optional

from flask import (
    Blueprint,
    current_app,
    flash,
    g,
    redirect,
    session,
    url_for,
)

from core.screen_flow import FlowEvent, Screen
from services.order_session import OrderSession
from modules.i18n import DEFAULT_LANGUAGE, translate
from logging_config import get_logger


# Module logger
logger = get_logger(__name__)

navigation_bp = Blueprint("navigation", __name__)

SCREEN_ENDPOINTS = {
    Screen.START: "start.start",
    Screen.ENTREE: "menu.entree",
    Screen.SIDE_DISH: "menu.side_dish",
    Screen.ACCOMPANIMENT: "menu.accompaniment",
    Screen.CHECKOUT: "checkout.checkout",
}


def get_order_session() -> OrderSession:
    """
    Get the OrderSession for the current request.

    Built from the Flask session on first use and cached on flask.g, so all
    handlers of one request share the same OrderState and controller.
    """
    order_session = g.get("order_session")
    if order_session is None:
        order_session = OrderSession.load(
            session,
            current_app.config["MENU_CATALOG"],
            tax_rate=current_app.config["ORDER_TAX_RATE"],
        )
        g.order_session = order_session
    return order_session


def screen_url(screen: Screen) -> str:
    """URL of the page that renders screen."""
    return url_for(SCREEN_ENDPOINTS[screen])


def redirect_to_screen(screen: Screen):
    return redirect(screen_url(screen))


def t(key: str, **kwargs) -> str:
    """Translate key into the session language (for flash messages)."""
    return translate(key, lang=session.get("language", DEFAULT_LANGUAGE), **kwargs)


def require_screen(screen: Screen) -> Optional[object]:
    """
    Guard a screen page.

    Returns:
        None when screen is the session's current screen, otherwise a
        redirect response to the current screen
    """
    current = get_order_session().current_screen
    if current is screen:
        return None

    logger.debug(f"Requested {screen.name} while on {current.name}, redirecting")
    flash(t("flash.wrong_screen"), "warning")
    return redirect_to_screen(current)


@navigation_bp.route("/back", methods=["POST"])
def back():
    """
    Navigate up one screen.

    Does nothing when the history is empty. Never resets the order.
    """
    order_session = get_order_session()
    screen = order_session.dispatch(FlowEvent.BACK_UP)
    return redirect_to_screen(screen)
