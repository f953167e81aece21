"""
Flask route blueprints for LunchTrayWeb.

One blueprint per wizard step plus shared endpoints:
- main: Root redirect and start screen
- menu: Entree, side dish and accompaniment screens
- checkout: Order summary, confirm and cancel
- navigation: Back button and shared helpers
- api: JSON order state and health check

Each blueprint is registered with the Flask app in create_app().
"""

from .main import start_bp
from .menu import menu_bp
from .checkout import checkout_bp
from .navigation import navigation_bp
from .api import api_bp

__all__ = [
    "start_bp",
    "menu_bp",
    "checkout_bp",
    "navigation_bp",
    "api_bp",
]


def register_blueprints(app):
    """
    Register all blueprints with the Flask app.

    Args:
        app: Flask application instance
    """
    app.register_blueprint(start_bp)
    app.register_blueprint(menu_bp)
    app.register_blueprint(checkout_bp)
    app.register_blueprint(navigation_bp)
    app.register_blueprint(api_bp)
