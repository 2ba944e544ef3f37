"""
HTTP API for FilmLab.
"""

from filmlab.api.server import create_app, main

__all__ = ["create_app", "main"]
