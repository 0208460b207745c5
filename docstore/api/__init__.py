"""HTTP surface for the document store."""

from .app import create_app

__all__ = ["create_app"]
