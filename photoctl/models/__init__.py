"""Data models for photoctl.

Provides Pydantic models for store records and the upload item lifecycle.
"""

from __future__ import annotations

from .base import BaseModel
from .item import FileSource, ItemStatus, UploadItem
from .photo import Photo, PhotosResponse, SearchResponse, UploadResponse
from .progress import (
    COMPLETE,
    ENCODE_PHASE_MAX,
    ENCODE_PHASE_MIN,
    TRANSMIT_PHASE_MAX,
    TRANSMIT_PHASE_MIN,
    BatchSummary,
    RunResult,
    encode_progress,
    transmit_progress,
)

__all__ = [
    # Base
    "BaseModel",
    # Store records
    "Photo",
    "UploadResponse",
    "PhotosResponse",
    "SearchResponse",
    # Items
    "FileSource",
    "ItemStatus",
    "UploadItem",
    # Progress
    "COMPLETE",
    "ENCODE_PHASE_MIN",
    "ENCODE_PHASE_MAX",
    "TRANSMIT_PHASE_MIN",
    "TRANSMIT_PHASE_MAX",
    "BatchSummary",
    "RunResult",
    "encode_progress",
    "transmit_progress",
]
