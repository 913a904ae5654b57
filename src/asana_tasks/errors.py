# src/asana_tasks/errors.py

"""
Exception hierarchy shared by the router, the HTTP dispatcher and the CLI.

Two families:
- caller errors (bad identifier, missing token) raised before any request,
- ApiError subclasses raised by the dispatcher for non-2xx responses.
"""

from __future__ import annotations

from typing import Any


class AsanaTasksError(Exception):
    """Base for all package errors."""


class ConfigurationError(AsanaTasksError):
    """Settings are missing or invalid (e.g. no access token)."""


class InvalidIdentifierError(AsanaTasksError, TypeError):
    """An identifier slot received something other than an integer."""

    def __init__(self, name: str, value: Any) -> None:
        super().__init__(f"{name} must be an integer identifier, got {type(value).__name__}: {value!r}")
        self.name = name
        self.value = value


class ApiError(AsanaTasksError):
    """Non-2xx response from the remote API."""

    status_code: int = 0

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        errors: list[str] | None = None,
        body: Any = None,
    ) -> None:
        super().__init__(message)
        if status_code is not None:
            self.status_code = status_code
        self.errors = list(errors or [])
        self.body = body

    def __str__(self) -> str:
        base = super().__str__()
        if self.errors:
            return f"{self.status_code}: {base} ({'; '.join(self.errors)})"
        return f"{self.status_code}: {base}"


class InvalidRequestError(ApiError):
    status_code = 400


class NoAuthorizationError(ApiError):
    status_code = 401


class PremiumOnlyError(ApiError):
    status_code = 402


class ForbiddenError(ApiError):
    status_code = 403


class NotFoundError(ApiError):
    status_code = 404


class RateLimitEnforcedError(ApiError):
    status_code = 429

    def __init__(self, message: str, *, retry_after: float = 0.0, **kwargs: Any) -> None:
        super().__init__(message, **kwargs)
        self.retry_after = retry_after


class ServerError(ApiError):
    status_code = 500


_BY_STATUS: dict[int, type[ApiError]] = {
    400: InvalidRequestError,
    401: NoAuthorizationError,
    402: PremiumOnlyError,
    403: ForbiddenError,
    404: NotFoundError,
    429: RateLimitEnforcedError,
}


def _error_messages(body: Any) -> list[str]:
    # Asana error bodies look like {"errors": [{"message": "..."}]}.
    if not isinstance(body, dict):
        return []
    raw = body.get("errors")
    if not isinstance(raw, list):
        return []
    out: list[str] = []
    for item in raw:
        if isinstance(item, dict) and item.get("message"):
            out.append(str(item["message"]))
    return out


def error_for_status(
    status_code: int,
    body: Any = None,
    *,
    reason: str = "",
    retry_after: float = 0.0,
) -> ApiError:
    """Build (not raise) the ApiError subclass matching an HTTP status."""
    message = reason or f"HTTP {status_code}"
    errors = _error_messages(body)

    if status_code == 429:
        return RateLimitEnforcedError(
            message,
            retry_after=retry_after,
            status_code=status_code,
            errors=errors,
            body=body,
        )

    cls = _BY_STATUS.get(status_code)
    if cls is None:
        cls = ServerError if status_code >= 500 else ApiError
    return cls(message, status_code=status_code, errors=errors, body=body)
