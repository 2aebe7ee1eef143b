"""HTTP API exposing the snippet use cases."""

from .server import create_app

__all__ = ["create_app"]
