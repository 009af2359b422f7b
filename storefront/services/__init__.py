"""
High-level service utilities for the storefront app.

Business logic for the product catalog lives here so that API views, the
Django admin and management commands share one implementation.
"""

from . import catalog  # noqa: F401

__all__ = ["catalog"]
