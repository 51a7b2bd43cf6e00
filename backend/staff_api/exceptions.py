"""Service-level exceptions.

Every failure raised by the service layer is a subclass of
`ServiceError` so the HTTP layer can translate them uniformly.
"""

from typing import Dict


class ServiceError(Exception):
    """Base class for all service errors."""
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(ServiceError):
    """A referenced employee or department does not exist."""
    status_code = 404


class DuplicateResourceError(ServiceError):
    """A unique value (email or id) is already in use."""
    status_code = 409


class ValidationError(ServiceError):
    """One or more field rules were violated.

    `errors` maps each failing field name to its message.
    """
    status_code = 400

    def __init__(self, errors: Dict[str, str], message: str = "Validation failed"):
        super().__init__(message)
        self.errors = dict(errors)


class InternalError(ServiceError):
    """An unexpected failure that does not fit another category."""
    status_code = 500
