"""
Menu screen routes.

Handles the three selection screens: entree, side dish, accompaniment.
Each page lists the category's items with the current selection and posts
back one of three actions:

- select: store the chosen item and stay on the screen
- next:   store the chosen item (if any) and advance
- cancel: abandon the order and return to the start screen
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

menu_bp = Blueprint("menu", __name__)

VALID_ACTIONS = ("select", "next", "cancel")


def _menu_screen(screen: Screen):
    """
    Handle GET/POST for one menu screen.

    GET: Display the category's items
    POST: Apply the posted action
    """
    guard = require_screen(screen)
    if guard is not None:
        return guard

    order_session = get_order_session()
    category = screen.menu_category

    if request.method == "POST":
        action = request.form.get("action", "select")
        if action not in VALID_ACTIONS:
            logger.warning(f"Invalid menu action: {action}, treating as select")
            action = "select"

        if action == "cancel":
            order_session.dispatch(FlowEvent.CANCEL)
            flash(t("flash.order_cancelled"), "info")
            return redirect_to_screen(order_session.current_screen)

        item_id = request.form.get("item_id", "").strip()
        if item_id:
            item = order_session.find_item(item_id)
            if item is None:
                logger.warning(f"Unknown {category.value} id posted: {item_id}")
                flash(t("flash.unknown_item"), "error")
                return redirect_to_screen(screen)
            order_session.select(item)

        if action == "next":
            return redirect_to_screen(order_session.dispatch(FlowEvent.NEXT))

        return redirect_to_screen(screen)

    return render_template(
        "menu.html",
        screen=screen,
        flow=order_session.flow,
        items=order_session.catalog.items(category),
        selected=order_session.order.selections()[category],
        totals=order_session.order.get_totals(),
    )


@menu_bp.route("/entree", methods=["GET", "POST"])
def entree():
    return _menu_screen(Screen.ENTREE)


@menu_bp.route("/side-dish", methods=["GET", "POST"])
def side_dish():
    return _menu_screen(Screen.SIDE_DISH)


@menu_bp.route("/accompaniment", methods=["GET", "POST"])
def accompaniment():
    return _menu_screen(Screen.ACCOMPANIMENT)
