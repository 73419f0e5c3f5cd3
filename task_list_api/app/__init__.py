"""
Application package initializer.

The project is organised into logical pieces: ``core`` holds
configuration, logging, errors and seed loading, ``schemas`` the
pydantic models, ``services`` the task collection and its operations,
and ``api`` the versioned HTTP routes.
"""

from .main import app  # noqa: F401
