"""Domain errors raised by the services and stores.

Each error carries a stable ``kind`` and an HTTP status; ``main.py`` renders
them as ``{"success": false, "error": kind, "message": message}``.
"""
from typing import Dict, Optional


class TaskTrackerError(Exception):
    kind = "error"
    status_code = 500
    default_message = "Something went wrong"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    @property
    def headers(self) -> Optional[Dict[str, str]]:
        return None


class ValidationError(TaskTrackerError):
    kind = "validation_error"
    status_code = 400
    default_message = "Invalid input"


class DuplicateEmailError(ValidationError):
    kind = "duplicate_email"
    status_code = 409
    default_message = "Email already registered"


class AuthenticationError(TaskTrackerError):
    kind = "authentication_error"
    status_code = 401
    default_message = "Not authenticated"

    @property
    def headers(self) -> Optional[Dict[str, str]]:
        return {"WWW-Authenticate": "Bearer"}


class NotFoundError(TaskTrackerError):
    """Raised for missing resources and for resources owned by someone else."""

    kind = "not_found"
    status_code = 404
    default_message = "Not found"


class StoreError(TaskTrackerError):
    kind = "store_error"
    status_code = 500
    default_message = "Storage is unavailable"
