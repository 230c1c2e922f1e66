"""Exception taxonomy for API and transport failures."""

from typing import Any

GENERIC_ERROR = "Request failed"


def format_field_errors(payload: Any) -> str | None:
    """Flatten a field-error map into one human-readable message.

    The server reports validation errors as ``{field: message}`` or
    ``{field: [message, ...]}``. Values are flattened one level and joined
    with ``". "``.

    Args:
        payload: Decoded response body

    Returns:
        Joined message, or None if the body has no usable messages
    """
    if not isinstance(payload, dict) or not payload:
        return None

    messages: list[str] = []
    for value in payload.values():
        if isinstance(value, list):
            messages.extend(str(item) for item in value)
        elif value is not None:
            messages.append(str(value))

    messages = [message for message in messages if message]
    if not messages:
        return None
    return ". ".join(messages)


class RestobookError(Exception):
    """Base class for all restobook errors."""


class TransportError(RestobookError):
    """The request never produced an HTTP response (timeout, connection reset)."""


class MalformedResponseError(RestobookError):
    """A 2xx response whose body does not have the expected shape."""


class ApiError(RestobookError):
    """The server answered with a non-2xx status."""

    def __init__(self, status_code: int, payload: Any = None, message: str | None = None):
        self.status_code = status_code
        self.payload = payload
        self.message = message or format_field_errors(payload) or GENERIC_ERROR
        super().__init__(f"{status_code}: {self.message}")

    @property
    def detail(self) -> str | None:
        """The ``detail`` field DRF puts on non-validation errors."""
        if isinstance(self.payload, dict):
            detail = self.payload.get("detail")
            if isinstance(detail, str):
                return detail
        return None


class ApiValidationError(ApiError):
    """400 response carrying a field-error map."""


class AuthenticationError(ApiError):
    """401 that survived the single token refresh attempt."""


class PermissionDeniedError(ApiError):
    """403 response for a role-gated resource."""


class NotFoundError(ApiError):
    """404 response."""


def error_for_status(status_code: int, payload: Any) -> ApiError:
    """Build the exception matching an HTTP status code."""
    if status_code == 400:
        return ApiValidationError(status_code, payload)
    if status_code == 401:
        return AuthenticationError(status_code, payload)
    if status_code == 403:
        return PermissionDeniedError(status_code, payload)
    if status_code == 404:
        return NotFoundError(status_code, payload)
    return ApiError(status_code, payload)
