"""Mini README: HTTP interface for the daily cost tracker.

Exports the FastAPI application factory; the static front-end it serves
lives in the ``static`` directory beside this module.
"""

from .web_app import create_application

__all__ = ["create_application"]
