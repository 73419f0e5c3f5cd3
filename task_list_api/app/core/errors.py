"""
Domain errors raised by the service layer.

Endpoints translate these into ``HTTPException`` instances with the
matching status code; the application then renders every HTTP error
as ``{"error": "<message>"}``.
"""


class TaskValidationError(ValueError):
    """A payload, query parameter or path parameter was rejected (HTTP 400)."""


class TaskNotFoundError(LookupError):
    """No task matches the requested id or priority (HTTP 404)."""
