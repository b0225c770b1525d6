"""Small JSON web remote built on roku_ecp."""

from .app import create_app

__all__ = ["create_app"]
