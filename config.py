"""
Configuration for LunchTrayWeb.

Values come from the environment, with a .env file loaded first.
"""

import os
from decimal import Decimal
from pathlib import Path

from dotenv import load_dotenv

# Load .env file early so environment variables are available for Config class
# This must happen before the Config class is defined
load_dotenv(override=True)

# Base directory (where this file lives)
BASE_DIR = Path(__file__).resolve().parent


class Config:
    """Default configuration for the Flask application."""

    # Flask settings
    SECRET_KEY = os.environ.get("FLASK_SECRET_KEY", "dev-secret-key")
    SESSION_COOKIE_NAME = "lunch_tray_session"
    ENVIRONMENT = os.environ.get("FLASK_ENV", "development")

    # Debug mode
    DEBUG = os.environ.get("FLASK_DEBUG", "1") == "1"

    # ==========================================================================
    # Order Configuration
    # ==========================================================================
    # ORDER_TAX_RATE: fraction of the item total charged as tax
    #   Default: 0.08 (8%)
    #
    # CURRENCY_SYMBOL: prefix used when formatting prices
    #
    # MENU_CATALOG_PATH: optional JSON menu (see modules/catalog.py)
    #   Unset: the built-in lunch menu is used
    # ==========================================================================
    ORDER_TAX_RATE = Decimal(os.environ.get("ORDER_TAX_RATE", "0.08"))
    CURRENCY_SYMBOL = os.environ.get("CURRENCY_SYMBOL", "$")
    MENU_CATALOG_PATH = os.environ.get("MENU_CATALOG_PATH", "")

    # Log directory for file logging (production only)
    LOG_DIR = os.environ.get("LOG_DIR", str(BASE_DIR / "logs"))


class ProductionConfig(Config):
    """Production configuration."""
    DEBUG = False
    TESTING = False
    SESSION_COOKIE_SECURE = True
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = 'Lax'
    PERMANENT_SESSION_LIFETIME = 3600  # 1 hour


class DevelopmentConfig(Config):
    """Development configuration."""
    DEBUG = True
    TESTING = False


class TestingConfig(Config):
    """Testing configuration."""
    DEBUG = False
    TESTING = True
    SECRET_KEY = "test-secret-key"
    ORDER_TAX_RATE = Decimal("0.08")
    MENU_CATALOG_PATH = ""
