"""
Application package initializer.

The project is organised into logical pieces: ``core`` holds
configuration, logging and storage, ``schemas`` the request and
response records, ``services`` the business logic and ``api`` the
HTTP routes.  ``main`` assembles them into a FastAPI application.
"""

from .main import app  # noqa: F401
