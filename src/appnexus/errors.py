"""
AppNexus error types.

Every failure surfaced by the client derives from AppNexusError and carries a
short machine-readable code alongside the human message.
"""

from typing import Any, Optional


class AppNexusError(Exception):
    def __init__(self, code: str, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.code = code
        self.details = details


class MalformedPathError(AppNexusError):
    def __init__(self, path: str, reason: str):
        super().__init__("malformed_path", f"Cannot resolve path {path!r}: {reason}", {"path": path})
        self.path = path


class SerializationError(AppNexusError):
    def __init__(self, message: str):
        super().__init__("serialization_error", message)


class DecodeError(AppNexusError):
    def __init__(self, message: str):
        super().__init__("decode_error", message)


class DispatchError(AppNexusError):
    """Transport-level failure: connection refused, timeout, DNS."""

    def __init__(self, message: str):
        super().__init__("dispatch_error", message)


class HTTPStatusError(AppNexusError):
    """Non-2xx status. The body is not decoded as an envelope."""

    def __init__(
        self,
        status_code: int,
        reason: str,
        headers: dict[str, str],
        retry_after: Optional[float] = None,
    ):
        super().__init__(
            "http_error",
            f"HTTP {status_code} {reason} | {headers!r}",
            {"status_code": status_code, "headers": headers},
        )
        self.status_code = status_code
        self.reason = reason
        self.headers = headers
        self.retry_after = retry_after


class ApiError(AppNexusError):
    """The envelope reported a logical failure, whatever the HTTP status."""

    def __init__(
        self,
        error_id: str,
        error: str,
        envelope: Any = None,
        error_description: Optional[str] = None,
        error_code: Optional[str] = None,
    ):
        super().__init__(
            error_id or "api_error",
            f"AppNexus [{error_id}]: {error}",
            {"error_description": error_description, "error_code": error_code},
        )
        self.error_id = error_id
        self.error = error
        self.error_description = error_description
        self.error_code = error_code
        self.envelope = envelope


class AuthError(AppNexusError):
    def __init__(self, message: str, code: str = "auth_error"):
        super().__init__(code, message)


class ReauthenticationError(AuthError):
    def __init__(self, message: str):
        super().__init__(f"Could not reauthenticate: {message}", code="reauth_error")


class ResourceError(AppNexusError):
    """Client-side misuse of a resource service, e.g. updating an item without an id."""

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__("resource_error", message, details)
