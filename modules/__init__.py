"""Helper modules for the Lunch Tray ordering wizard."""

__all__ = [
    "catalog",
    "i18n",
]
