"""Exception hierarchy for photoctl.

Provides typed exceptions for different failure modes with clear error messages.
"""

from __future__ import annotations

from typing import Any

# Failure categories worth a manual retry; protocol faults count as server-side
RETRYABLE_CATEGORIES = frozenset({"server", "network", "protocol"})


class PhotoCtlError(Exception):
    """Base exception for all photoctl errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            detail_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.message} ({detail_str})"
        return self.message


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigurationError(PhotoCtlError):
    """Error in configuration (missing, invalid, or malformed)."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        value: Any = None,
    ):
        details = {}
        if field:
            details["field"] = field
        if value is not None:
            details["value"] = repr(value)
        super().__init__(message, details)
        self.field = field
        self.value = value


class ProfileNotFoundError(ConfigurationError):
    """Requested profile does not exist."""

    def __init__(self, profile: str):
        super().__init__(f"Profile not found: {profile}", field="profile", value=profile)
        self.profile = profile


# =============================================================================
# Validation Errors
# =============================================================================


class ValidationError(PhotoCtlError):
    """Input validation failed."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        value: Any = None,
    ):
        details = {}
        if field:
            details["field"] = field
        if value is not None:
            details["value"] = repr(value)
        super().__init__(message, details)
        self.field = field
        self.value = value


class InvalidURLError(ValidationError):
    """Invalid URL format."""

    def __init__(self, url: str, reason: str = ""):
        msg = f"Invalid URL: {url}"
        if reason:
            msg = f"{msg} - {reason}"
        super().__init__(msg, field="url", value=url)
        self.url = url
        self.reason = reason


# =============================================================================
# Connection Errors
# =============================================================================


class ConnectionError(PhotoCtlError):
    """Base class for connection-related errors."""

    def __init__(self, message: str, url: str | None = None):
        details = {"url": url} if url else {}
        super().__init__(message, details)
        self.url = url


class NetworkError(ConnectionError):
    """Network-level error (DNS, TCP, TLS)."""

    def __init__(self, url: str, cause: str | None = None):
        msg = f"Network error connecting to {url}"
        if cause:
            msg = f"{msg}: {cause}"
        super().__init__(msg, url)
        self.cause = cause


class ServerUnreachableError(ConnectionError):
    """Server is not reachable."""

    def __init__(self, url: str):
        super().__init__(f"Server unreachable: {url}", url)


class RetryExhaustedError(ConnectionError):
    """All retry attempts failed."""

    def __init__(self, operation: str, attempts: int, last_error: Exception | None = None):
        msg = f"Operation '{operation}' failed after {attempts} attempts"
        if last_error:
            msg = f"{msg}: {last_error}"
        super().__init__(msg)
        self.operation = operation
        self.attempts = attempts
        self.last_error = last_error


class ResourceNotFoundError(PhotoCtlError):
    """Requested endpoint or resource does not exist on the store."""

    def __init__(self, resource_type: str, resource_id: str):
        super().__init__(
            f"{resource_type} not found: {resource_id}",
            {"resource_type": resource_type, "resource_id": resource_id},
        )
        self.resource_type = resource_type
        self.resource_id = resource_id


# =============================================================================
# Operation Errors
# =============================================================================


class OperationError(PhotoCtlError):
    """Error during an operation."""

    def __init__(
        self,
        operation: str,
        message: str,
        details: dict[str, Any] | None = None,
    ):
        full_details = {"operation": operation}
        if details:
            full_details.update(details)
        super().__init__(message, full_details)
        self.operation = operation


class UploadError(OperationError):
    """Error while uploading a single item.

    Every subclass carries a ``category`` used to group failures in the
    batch advisory message.
    """

    category = "internal"

    def __init__(
        self,
        message: str,
        file_path: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        full_details = details or {}
        if file_path:
            full_details["file"] = file_path
        super().__init__("upload", message, full_details)
        self.file_path = file_path

    @property
    def retryable(self) -> bool:
        """Whether a manual retry has a reasonable chance of succeeding."""
        return self.category in RETRYABLE_CATEGORIES


class ReadError(UploadError):
    """Local content could not be read (permission, missing file, I/O fault)."""

    category = "read"

    def __init__(self, file_path: str, reason: str = ""):
        msg = f"Failed to read {file_path}"
        if reason:
            msg = f"{msg}: {reason}"
        super().__init__(msg, file_path)
        self.reason = reason


class EncodeCancelledError(UploadError):
    """Encoding was cancelled between chunks."""

    category = "cancelled"

    def __init__(self, file_path: str):
        super().__init__(f"Encoding cancelled: {file_path}", file_path)


class TransportError(UploadError):
    """The store rejected the upload or the network exchange failed.

    ``status_code`` is None for network faults.
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        category: str | None = None,
        file_path: str | None = None,
    ):
        details: dict[str, Any] = {}
        if status_code is not None:
            details["status_code"] = status_code
        super().__init__(message, file_path, details)
        self.status_code = status_code
        self.category = category or classify_status(status_code)


class ProtocolError(TransportError):
    """The store acknowledged the upload with a malformed response."""

    def __init__(self, message: str, status_code: int | None = None, file_path: str | None = None):
        super().__init__(message, status_code, "protocol", file_path)


def classify_status(status_code: int | None) -> str:
    """Map an HTTP status code to a failure category."""
    if status_code is None:
        return "network"
    if 300 <= status_code < 500:
        return "client"
    return "server"


# =============================================================================
# State Errors
# =============================================================================


class StateTransitionError(PhotoCtlError):
    """An upload item was asked to make a transition its state does not allow."""

    def __init__(self, item_id: str, current: str, target: str):
        super().__init__(
            f"Illegal transition {current} -> {target}",
            {"item": item_id},
        )
        self.item_id = item_id
        self.current = current
        self.target = target
