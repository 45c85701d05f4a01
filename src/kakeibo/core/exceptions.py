"""Exception hierarchy for the application.

Every exception carries an error_code from errors.py. The API layer turns
them into the shared JSON error shape, so services raise these instead of
HTTPException.
"""

from typing import Any


class KakeiboError(Exception):
    """Base exception for all application errors.

    Attributes:
        error_code: Code from the error catalog (e.g., "VAL_003")
        details: Additional context about the error
        http_status: HTTP status code to return
    """

    default_status = 500

    def __init__(
        self,
        error_code: str,
        details: dict[str, Any] | None = None,
        http_status: int | None = None,
    ):
        self.error_code = error_code
        self.details = details or {}
        self.http_status = http_status or self.default_status
        super().__init__(error_code)


class AuthenticationError(KakeiboError):
    """Sign-in, sign-up or token validation failed."""

    default_status = 401


class RemoteQueryError(KakeiboError):
    """The row store rejected a query.

    ``details["backend_message"]`` holds the database's own message so it can
    be shown to the user.
    """

    default_status = 502


class LocalValidationError(KakeiboError):
    """User input failed validation before anything was persisted.

    Covers missing file, missing year/month and statements without
    parsable rows.
    """

    default_status = 400


class NotFoundError(KakeiboError):
    """Requested row does not exist in the caller's household."""

    default_status = 404
