"""REST API layer for clusterlint.

Exposes:
    create_app -- FastAPI application factory.
"""

from clusterlint.api.app import create_app

__all__ = ["create_app"]
