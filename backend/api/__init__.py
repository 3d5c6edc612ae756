"""
Kastel Ops API package.

Provides the FastAPI application for the staff scheduling service.
"""

from .app import app, create_app

__all__ = ["app", "create_app"]
