"""
API routes (AJAX endpoints).

Handles:
- /api/order - Current screen, selections and totals as JSON
- /health - Health check endpoint
"""

from flask import (
    Blueprint,
    jsonify,
    session,
)

from routes.navigation import get_order_session
from modules.i18n import DEFAULT_LANGUAGE, translate

api_bp = Blueprint("api", __name__)


@api_bp.route("/api/order", methods=["GET"])
def order_summary():
    """
    Current state of the session's order.

    Amounts are strings so no precision is lost in JSON.
    """
    order_session = get_order_session()
    data = order_session.summary()
    data["title"] = translate(
        order_session.current_screen.title_key,
        lang=session.get("language", DEFAULT_LANGUAGE),
    )
    return jsonify(data)


@api_bp.route("/health", methods=["GET"])
def health():
    return jsonify({"status": "ok"})
