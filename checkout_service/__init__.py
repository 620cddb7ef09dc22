"""Checkout service: turns shopping baskets into warehouse-notified orders."""

__version__ = "0.1.0"
