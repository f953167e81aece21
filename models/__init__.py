"""
Data models for LunchTrayWeb.

This module contains immutable dataclasses for:
- MenuItem: One entry of the static menu catalog
- MenuCategory: Entree, side dish, accompaniment
- OrderTotals: Derived subtotal, tax and total for the checkout screen
"""

from .menu import MenuCategory, MenuItem, OrderTotals, format_price

__all__ = [
    "MenuCategory",
    "MenuItem",
    "OrderTotals",
    "format_price",
]
