"""Application exception types."""

from bank_api.schemas.error import ErrorResponse

PERMISSION_DENIED_MESSAGE = "Permission denied"


class ApiError(Exception):
    """Structured API error that maps directly to contract error payloads."""

    def __init__(self, status_code: int, code: str, message: str, details: dict | None = None) -> None:
        self.status_code = status_code
        self.payload = ErrorResponse(error=message, code=code, details=details)
        super().__init__(message)


class AccessDeniedError(ApiError):
    """Denial raised by the authorization gate.

    ``reason`` is a machine-readable cause for logs only; clients always
    receive the same message for a given status.
    """

    def __init__(self, status_code: int, code: str, reason: str, message: str = PERMISSION_DENIED_MESSAGE) -> None:
        super().__init__(status_code=status_code, code=code, message=message)
        self.reason = reason


def unauthenticated(reason: str) -> AccessDeniedError:
    return AccessDeniedError(status_code=403, code="UNAUTHENTICATED", reason=reason)


def forbidden(reason: str) -> AccessDeniedError:
    return AccessDeniedError(status_code=403, code="FORBIDDEN", reason=reason)


def bad_request(reason: str, message: str) -> AccessDeniedError:
    return AccessDeniedError(status_code=400, code="BAD_REQUEST", reason=reason, message=message)


__all__ = ["AccessDeniedError", "ApiError", "bad_request", "forbidden", "unauthenticated"]
