"""Pricebook — receipt price tracking and item price-history reconciliation."""

__version__ = "1.0.0"
