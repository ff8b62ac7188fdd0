"""Mini README: HTTP interface for Sheet Ledger.

Exports the FastAPI application factory that serves the JSON API and the
browser front end's static files.
"""

from .web_app import create_application, envelope

__all__ = ["create_application", "envelope"]
