"""
LunchTrayWeb - Flask Application Entry Point.

This is a slim app factory that:
1. Loads the menu catalog (fail-fast on a bad catalog file)
2. Registers route blueprints
3. Sets up error handlers and context processors

ARCHITECTURE:
    Request
    ├── OrderSession.load()  (flask.session -> OrderState + ScreenFlowController)
    ├── Screen blueprint     (select items / dispatch navigation events)
    └── OrderSession.save()  (after every selection and dispatch)

The ordering core (core/) knows nothing about Flask. Each browser session
owns exactly one OrderState and one ScreenFlowController.
"""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path

from dotenv import load_dotenv
from flask import Flask, flash, redirect, request, session, url_for

from logging_config import setup_logging, get_logger
from core.exceptions import CatalogError, OrderFlowError
from models.menu import format_price
from modules.catalog import default_catalog, load_catalog
from modules.i18n import (
    create_translation_filter,
    get_supported_languages,
    i18n_manager,
    DEFAULT_LANGUAGE,
    translate,
)
from routes import register_blueprints


# Module logger (configured after setup_logging)
logger = get_logger(__name__)


def _get_base_path() -> Path:
    """
    Get the base path for the application.

    In a frozen bundle: Returns the directory containing the executable
    In development: Returns the directory containing app.py
    """
    if getattr(sys, 'frozen', False):
        return Path(sys.executable).parent
    else:
        return Path(__file__).parent


def create_app(config_object: str = "config.Config") -> Flask:
    """
    Application factory - creates and configures Flask app.

    FAIL-FAST: If MENU_CATALOG_PATH is set and the file cannot be loaded,
    the app will not start.

    Args:
        config_object: Import path of the config class

    Returns:
        Configured Flask application

    Raises:
        CatalogError: If the configured catalog file is missing or malformed
    """
    # Use override=True so .env file always takes precedence over shell environment
    env_file = _get_base_path() / '.env'
    if env_file.exists():
        load_dotenv(env_file, override=True)
    else:
        load_dotenv(override=True)

    app = Flask(__name__)
    app.config.from_object(config_object)

    # Configure logging
    log_level = logging.DEBUG if app.config.get("DEBUG") else logging.INFO
    enable_file_logging = app.config.get("ENVIRONMENT") == "production"

    root_logger = setup_logging(
        app_name="lunch_tray",
        log_level=log_level,
        log_dir=Path(app.config["LOG_DIR"]),
        enable_file_logging=enable_file_logging
    )

    # Set Flask's logger to use our configured logger
    app.logger.handlers = root_logger.handlers
    app.logger.setLevel(log_level)

    logger.info(f"Starting LunchTrayWeb in {app.config.get('ENVIRONMENT')} mode")

    # =========================================================================
    # MENU CATALOG (FAIL-FAST)
    # =========================================================================

    catalog_path = app.config.get("MENU_CATALOG_PATH")
    if catalog_path:
        try:
            catalog = load_catalog(Path(catalog_path))
        except CatalogError as e:
            logger.error(f"FATAL: Cannot start application - {e}")
            raise
    else:
        catalog = default_catalog()
        logger.info(f"Using built-in menu ({len(catalog)} items)")

    app.config["MENU_CATALOG"] = catalog
    logger.info(f"Tax rate: {app.config['ORDER_TAX_RATE']}")

    # =========================================================================
    # REGISTER BLUEPRINTS
    # =========================================================================

    register_blueprints(app)

    # =========================================================================
    # CONTEXT PROCESSORS
    # =========================================================================

    @app.context_processor
    def inject_i18n():
        """Inject translation function into all templates."""
        current_lang = session.get("language", DEFAULT_LANGUAGE)
        return {
            "_": create_translation_filter(current_lang),
            "current_language": current_lang,
            "supported_languages": get_supported_languages(),
        }

    @app.template_filter("price")
    def price_filter(amount):
        """Format an amount with the configured currency symbol."""
        return format_price(amount, app.config.get("CURRENCY_SYMBOL", "$"))

    # =========================================================================
    # ERROR HANDLERS
    # =========================================================================

    def _t(key: str, **kwargs) -> str:
        return translate(key, lang=session.get("language", DEFAULT_LANGUAGE), **kwargs)

    @app.errorhandler(OrderFlowError)
    def handle_order_flow_error(e):
        # Wiring bug: log loudly, keep the customer on their current screen
        logger.error(f"Order flow error on {request.method} {request.path}: {e}", exc_info=True)
        flash(_t("flash.navigation_error"), "error")
        return redirect(url_for("start.index"))

    @app.errorhandler(404)
    def handle_not_found(e):
        flash(_t("flash.page_not_found"), "warning")
        return redirect(url_for("start.index"))

    @app.errorhandler(500)
    def handle_server_error(e):
        logger.error(f"500 error: {e}", exc_info=True)
        return "An unexpected error occurred. Please try again.", 500

    # =========================================================================
    # LANGUAGE ROUTE
    # =========================================================================

    @app.route("/set_language/<lang>", methods=["GET"])
    def set_language(lang: str):
        if i18n_manager.is_language_supported(lang):
            session["language"] = lang
            session.modified = True
            flash(_t("flash.language_changed", name=get_supported_languages()[lang]["name"]), "success")
        else:
            flash(_t("flash.unsupported_language", code=lang), "error")
        return redirect(request.referrer or url_for("start.index"))

    logger.info("Application initialized successfully")
    return app


if __name__ == "__main__":
    app = create_app()
    debug_mode = os.environ.get("FLASK_DEBUG", "1") == "1"
    app.run(debug=debug_mode)
