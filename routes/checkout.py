"""
Checkout route.

Displays the order summary (selected items, subtotal, tax, total) and
handles confirm/cancel. Both return to the start screen with a fresh order.
"""

from flask import (
    Blueprint,
    flash,
    render_template,
    request,
)

from core.screen_flow import FlowEvent, Screen
from routes.navigation import (
    get_order_session,
    redirect_to_screen,
    require_screen,
    t,
)
from logging_config import get_logger


# Module logger
logger = get_logger(__name__)

checkout_bp = Blueprint("checkout", __name__)


@checkout_bp.route("/checkout", methods=["GET"])
def checkout():
    """Display the order summary."""
    guard = require_screen(Screen.CHECKOUT)
    if guard is not None:
        return guard

    order_session = get_order_session()
    return render_template(
        "checkout.html",
        screen=Screen.CHECKOUT,
        flow=order_session.flow,
        selections=order_session.order.selections(),
        totals=order_session.order.get_totals(),
    )


@checkout_bp.route("/checkout", methods=["POST"])
def checkout_action():
    """
    Confirm or cancel the order.

    Form field "action": "submit" (confirm) or "cancel".
    """
    guard = require_screen(Screen.CHECKOUT)
    if guard is not None:
        return guard

    order_session = get_order_session()
    action = request.form.get("action", "submit")

    if action == "cancel":
        screen = order_session.dispatch(FlowEvent.CANCEL)
        flash(t("flash.order_cancelled"), "info")
        return redirect_to_screen(screen)

    totals = order_session.order.get_totals()
    logger.info(f"Order submitted, total {totals.grand_total}")
    screen = order_session.dispatch(FlowEvent.NEXT)
    flash(t("flash.order_submitted"), "success")
    return redirect_to_screen(screen)
