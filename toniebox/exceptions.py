"""
Toniebox exception hierarchy.

All exceptions inherit from TonieboxError for easy catching.
Network failures (timeouts, refused connections) are raised by httpx unchanged.
"""

from typing import Any


class TonieboxError(Exception):
    """Base exception for all toniebox errors."""

    def __init__(self, message: str, **context: Any) -> None:
        super().__init__(message)
        self.message = message
        self.context = context

    def __str__(self) -> str:
        if self.context:
            ctx = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
            return f"{self.message} ({ctx})"
        return self.message


class AuthenticationError(TonieboxError):
    """Authentication failed."""


class InvalidCredentialsError(AuthenticationError):
    """Username or password missing."""


class APIError(TonieboxError):
    """API request returned an unexpected HTTP status."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int,
        body: str = "",
        endpoint: str | None = None,
    ) -> None:
        super().__init__(message, status_code=status_code, body=body, endpoint=endpoint)
        self.status_code = status_code
        self.body = body
        self.endpoint = endpoint


class LoginError(AuthenticationError, APIError):
    """Identity provider rejected the login."""


class UnauthorizedError(APIError):
    """Request rejected with 401/403 (missing, invalid or expired token)."""


class NotFoundError(APIError):
    """Resource not found (household, tonie)."""


class ServerError(APIError):
    """Server-side error (5xx)."""


class StorageUploadError(APIError):
    """Object storage rejected the chapter upload."""


class ResponseDecodeError(TonieboxError):
    """Response body is not JSON or does not have the expected shape."""

    def __init__(self, message: str, *, endpoint: str | None = None) -> None:
        super().__init__(message, endpoint=endpoint)
        self.endpoint = endpoint


class TonieNotBoundError(TonieboxError):
    """Creative-Tonie was not obtained through a client and cannot reach the API."""

    def __init__(self, message: str = "tonie not properly initialized") -> None:
        super().__init__(message)


class UploadFileError(TonieboxError):
    """Local file to upload cannot be read."""

    def __init__(self, message: str, *, path: str) -> None:
        super().__init__(message, path=path)
        self.path = path
