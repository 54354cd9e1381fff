"""
asgi.py -- ASGI entry point for Transbook.

Run with:  uvicorn asgi:app --reload

Kept separate from api/main.py so process managers and the test suite can
import the application object from one stable location.
"""

from api.main import app

__all__ = ["app"]
