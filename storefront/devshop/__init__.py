# Development shop backend

from .app import app, PRODUCTS

__all__ = ["app", "PRODUCTS"]
