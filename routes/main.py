"""
Start screen routes.

The landing page of the wizard and the "Start Order" action.
"""

from flask import Blueprint, render_template

from core.screen_flow import FlowEvent, Screen
from routes.navigation import get_order_session, redirect_to_screen, require_screen

start_bp = Blueprint("start", __name__)


@start_bp.route("/")
def index():
    """Redirect root to whichever screen the session is on."""
    return redirect_to_screen(get_order_session().current_screen)


@start_bp.route("/start", methods=["GET"])
def start():
    """Display the start screen."""
    guard = require_screen(Screen.START)
    if guard is not None:
        return guard

    return render_template("start.html", screen=Screen.START, flow=get_order_session().flow)


@start_bp.route("/start", methods=["POST"])
def start_order():
    """Begin a new order and move to the entree menu."""
    guard = require_screen(Screen.START)
    if guard is not None:
        return guard

    order_session = get_order_session()
    screen = order_session.dispatch(FlowEvent.START)
    return redirect_to_screen(screen)
