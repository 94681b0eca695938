"""
Service-layer error taxonomy.

Service functions raise these; `aila_admin.main` renders them as
`{"detail": <message>}` with the matching HTTP status code.
"""


class ServiceError(Exception):
    """Base class for errors that map onto an HTTP status code."""

    status_code = 500

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class ValidationFailed(ServiceError):
    """Missing or invalid input (e.g. no title, bad id format, duplicate username)."""

    status_code = 400


class AuthenticationFailed(ServiceError):
    """Missing, invalid or expired credentials."""

    status_code = 401


class PermissionDenied(ServiceError):
    """Valid credentials without the required privilege or ownership."""

    status_code = 403


class NotFound(ServiceError):
    status_code = 404


class Conflict(ServiceError):
    """The requested transition is not allowed from the current state."""

    status_code = 409


class PayloadTooLarge(ServiceError):
    status_code = 413
