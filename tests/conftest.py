"""
Shared fixtures for the LunchTrayWeb test suite.
"""

from decimal import Decimal

import pytest

from core.order_state import OrderState
from core.screen_flow import ScreenFlowController
from models.menu import MenuCategory, MenuItem
from modules.catalog import MenuCatalog, default_catalog


def make_item(item_id, price, category, name=None):
    """Build a MenuItem with throwaway description/calories."""
    return MenuItem(
        id=item_id,
        name=name or item_id.replace("-", " ").title(),
        description="",
        price=Decimal(price),
        calories=0,
        category=category,
    )


@pytest.fixture
def burrito():
    return make_item("burrito", "5.00", MenuCategory.ENTREE, "Burrito")


@pytest.fixture
def taco():
    return make_item("taco", "3.25", MenuCategory.ENTREE, "Taco")


@pytest.fixture
def chips():
    return make_item("chips", "2.00", MenuCategory.SIDE_DISH, "Chips")


@pytest.fixture
def salsa():
    return make_item("salsa", "0.50", MenuCategory.ACCOMPANIMENT, "Salsa")


@pytest.fixture
def tex_mex_catalog(burrito, taco, chips, salsa):
    """Small catalog matching the checkout scenario."""
    return MenuCatalog([burrito, taco, chips, salsa])


@pytest.fixture
def lunch_catalog():
    """The built-in lunch menu."""
    return default_catalog()


@pytest.fixture
def order():
    return OrderState()


@pytest.fixture
def flow(order):
    return ScreenFlowController(order)


@pytest.fixture
def app():
    """Flask app with the testing config and built-in menu."""
    from app import create_app

    flask_app = create_app("config.TestingConfig")
    return flask_app


@pytest.fixture
def client(app):
    return app.test_client()
