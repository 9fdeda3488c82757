"""Shopfront: decide at startup between a remote web storefront and the native UI."""

__all__ = ["__version__"]

__version__ = "0.1.0"
