"""Storefront client: catalog, stock-aware cart and checkout hand-off."""

__version__ = "1.0.0"
