"""Input validation helpers for photoctl."""

from __future__ import annotations

from pathlib import Path
from urllib.parse import urlparse

from photoctl.core.exceptions import InvalidURLError, ValidationError

MAX_WORKERS = 64
MAX_TIMEOUT_SECONDS = 24 * 60 * 60


def validate_server_url(url: str) -> str:
    """Validate and normalize a store base URL.

    Args:
        url: URL as entered by the user.

    Returns:
        URL without trailing slash.

    Raises:
        InvalidURLError: If the URL is not an http(s) URL with a host.
    """
    if not url or not url.strip():
        raise InvalidURLError(url, "URL cannot be empty")

    url = url.strip()
    parsed = urlparse(url)
    if parsed.scheme not in ("http", "https"):
        raise InvalidURLError(url, "scheme must be http or https")
    if not parsed.netloc:
        raise InvalidURLError(url, "missing host")

    return url.rstrip("/")


def validate_workers(workers: int) -> int:
    """Validate the number of concurrent upload workers."""
    if not isinstance(workers, int) or isinstance(workers, bool):
        raise ValidationError("Workers must be an integer", field="workers", value=workers)
    if workers < 1 or workers > MAX_WORKERS:
        raise ValidationError(
            f"Workers must be between 1 and {MAX_WORKERS}",
            field="workers",
            value=workers,
        )
    return workers


def validate_timeout(timeout: int) -> int:
    """Validate an HTTP timeout in seconds."""
    if not isinstance(timeout, int) or isinstance(timeout, bool):
        raise ValidationError("Timeout must be an integer", field="timeout", value=timeout)
    if timeout < 1 or timeout > MAX_TIMEOUT_SECONDS:
        raise ValidationError(
            f"Timeout must be between 1 and {MAX_TIMEOUT_SECONDS} seconds",
            field="timeout",
            value=timeout,
        )
    return timeout


def validate_upload_path(path: Path) -> Path:
    """Ensure a selected path is an existing regular file."""
    if not path.exists():
        raise ValidationError(f"File does not exist: {path}", field="path", value=str(path))
    if not path.is_file():
        raise ValidationError(f"Not a file: {path}", field="path", value=str(path))
    return path
