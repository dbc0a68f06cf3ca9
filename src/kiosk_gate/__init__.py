"""Kiosk Gate: daily and concurrent admission control for kiosk sessions."""

__version__ = "0.1.0"
