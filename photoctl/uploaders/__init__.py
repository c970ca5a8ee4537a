"""Upload pipeline for photoctl.

This module provides the building blocks of a batch upload:
- Encoder (chunked base64 of a file)
- Transport (streamed JSON upload to the store)
- Item store (replace-by-id shared state)
- Scheduler (bounded worker pool)
- Preview registry (scoped preview references)

Use `UploadService` from `photoctl.services.uploads` as the public API.
"""

from photoctl.uploaders.constants import (
    CHUNK_SIZE,
    DEFAULT_UPLOAD_WORKERS,
    SEND_CHUNK_SIZE,
    UPLOAD_PATH,
)
from photoctl.uploaders.encoder import EncodedPayload, encode_source
from photoctl.uploaders.previews import PreviewRegistry
from photoctl.uploaders.scheduler import ClaimCursor, UploadScheduler
from photoctl.uploaders.state import ItemStore
from photoctl.uploaders.transport import Transport, build_request_body

__all__ = [
    # Constants
    "CHUNK_SIZE",
    "DEFAULT_UPLOAD_WORKERS",
    "SEND_CHUNK_SIZE",
    "UPLOAD_PATH",
    # Encoder
    "EncodedPayload",
    "encode_source",
    # Transport
    "Transport",
    "build_request_body",
    # State
    "ItemStore",
    "PreviewRegistry",
    # Scheduler
    "ClaimCursor",
    "UploadScheduler",
]
