"""Catalog API endpoints for Card Catalog Core.

This module provides the catalog blueprint that aggregates the public
read-only resources:
- Artists
- Cards

The blueprint is registered in main.py under settings.api_prefix. Catalog
endpoints are public; account endpoints live in the auth package.
"""

from flask import Blueprint

from .artists import artists_bp
from .cards import cards_bp

catalog_bp = Blueprint("catalog", __name__)

catalog_bp.register_blueprint(artists_bp)
catalog_bp.register_blueprint(cards_bp)

__all__ = ["catalog_bp"]
