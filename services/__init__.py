"""
Services layer for LunchTrayWeb.

This module contains the session-facing services:
- OrderSession: One customer's OrderState + ScreenFlowController,
  persisted in the signed Flask cookie session

Session Model:
    Each browser session owns exactly one OrderSession.
    It is rebuilt at the start of every request and written back after
    every selection and navigation event.
"""

from .order_session import OrderSession, ORDER_KEY

__all__ = [
    "OrderSession",
    "ORDER_KEY",
]
