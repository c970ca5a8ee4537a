"""Chunked base64 encoder for upload payloads."""

from __future__ import annotations

import base64
import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass

from photoctl.core.exceptions import EncodeCancelledError, ReadError
from photoctl.models.item import FileSource
from photoctl.uploaders.constants import CHUNK_SIZE

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int], None]


@dataclass(frozen=True)
class EncodedPayload:
    """Transfer-safe payload for one source."""

    file_name: str
    data: str
    raw_size: int
    content_type: str | None = None


def encode_source(
    source: FileSource,
    progress_callback: ProgressCallback | None = None,
    *,
    chunk_size: int = CHUNK_SIZE,
    cancel_event: threading.Event | None = None,
) -> EncodedPayload:
    """Read a source in fixed-size chunks and encode it as base64.

    Args:
        source: File to encode.
        progress_callback: Called with (bytes_read, total_bytes) after each chunk.
        chunk_size: Bytes per read; must be a positive multiple of 3.
        cancel_event: Checked between chunks; encoding stops once it is set.

    Returns:
        EncodedPayload with the base64 text.

    Raises:
        ReadError: If the source cannot be opened or read.
        EncodeCancelledError: If cancel_event was set.
        ValueError: If chunk_size is not a positive multiple of 3.
    """
    if chunk_size <= 0 or chunk_size % 3:
        raise ValueError(f"chunk_size must be a positive multiple of 3: {chunk_size}")

    parts: list[bytes] = []
    bytes_read = 0
    total = source.size

    try:
        with source.open() as fh:
            while True:
                if cancel_event is not None and cancel_event.is_set():
                    raise EncodeCancelledError(str(source.path))
                chunk = fh.read(chunk_size)
                if not chunk:
                    break
                bytes_read += len(chunk)
                parts.append(base64.b64encode(chunk))
                if progress_callback:
                    progress_callback(bytes_read, max(total, bytes_read))
    except OSError as e:
        raise ReadError(str(source.path), e.strerror or str(e)) from e

    if bytes_read == 0 and progress_callback:
        progress_callback(0, 0)

    logger.debug("Encoded %s (%d bytes)", source.name, bytes_read)
    return EncodedPayload(
        file_name=source.name,
        data=b"".join(parts).decode("ascii"),
        raw_size=bytes_read,
        content_type=source.content_type,
    )
