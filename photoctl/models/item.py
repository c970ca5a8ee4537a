"""Upload item model and its lifecycle transitions.

Items are immutable. Every transition returns a replaced copy, which the
item store swaps in by id, so readers never observe a half-applied update.
"""

from __future__ import annotations

import mimetypes
from dataclasses import dataclass, replace
from enum import Enum
from pathlib import Path
from typing import BinaryIO
from uuid import uuid4

from photoctl.core.exceptions import StateTransitionError

from .photo import Photo
from .progress import COMPLETE, TRANSMIT_PHASE_MIN, encode_progress, transmit_progress


class ItemStatus(Enum):
    """Lifecycle states of an upload item."""

    QUEUED = "queued"
    ENCODING = "encoding"
    UPLOADING = "uploading"
    SUCCESS = "success"
    ERROR = "error"

    @property
    def is_active(self) -> bool:
        """Check if a worker currently holds the item."""
        return self in (ItemStatus.ENCODING, ItemStatus.UPLOADING)

    @property
    def is_terminal(self) -> bool:
        """Check if the item finished its attempt."""
        return self in (ItemStatus.SUCCESS, ItemStatus.ERROR)


_TRANSITIONS: dict[ItemStatus, frozenset[ItemStatus]] = {
    ItemStatus.QUEUED: frozenset({ItemStatus.ENCODING, ItemStatus.SUCCESS, ItemStatus.ERROR}),
    ItemStatus.ENCODING: frozenset({ItemStatus.ENCODING, ItemStatus.UPLOADING, ItemStatus.ERROR}),
    ItemStatus.UPLOADING: frozenset({ItemStatus.UPLOADING, ItemStatus.SUCCESS, ItemStatus.ERROR}),
    ItemStatus.SUCCESS: frozenset({ItemStatus.QUEUED}),
    ItemStatus.ERROR: frozenset({ItemStatus.QUEUED}),
}


@dataclass(frozen=True)
class FileSource:
    """Handle to a selected file and its metadata."""

    path: Path
    name: str
    size: int
    content_type: str | None = None

    @classmethod
    def from_path(cls, path: Path) -> FileSource:
        """Build a source from a local path.

        The content type is guessed from the file name, the way a browser
        declares it for a picked file.
        """
        path = Path(path)
        content_type, _ = mimetypes.guess_type(path.name)
        return cls(
            path=path,
            name=path.name,
            size=path.stat().st_size,
            content_type=content_type,
        )

    def open(self) -> BinaryIO:
        """Open the raw content for reading."""
        return self.path.open("rb")


@dataclass(frozen=True)
class UploadItem:
    """One file's upload lifecycle record."""

    id: str
    source: FileSource
    preview_ref: str = ""
    status: ItemStatus = ItemStatus.QUEUED
    progress: int = 0
    error: str | None = None
    error_category: str | None = None
    record: Photo | None = None

    @classmethod
    def create(cls, source: FileSource, preview_ref: str = "") -> UploadItem:
        """Create a queued item with a fresh id."""
        return cls(id=uuid4().hex, source=source, preview_ref=preview_ref)

    def _move(self, target: ItemStatus, **changes: object) -> UploadItem:
        if target not in _TRANSITIONS[self.status]:
            raise StateTransitionError(self.id, self.status.value, target.value)
        return replace(self, status=target, **changes)

    # -------------------------------------------------------------------------
    # Transitions
    # -------------------------------------------------------------------------

    def requeue(self) -> UploadItem:
        """Reset for a new attempt: queued, progress 0, no error."""
        if self.status is ItemStatus.QUEUED:
            return replace(self, progress=0, error=None, error_category=None, record=None)
        return self._move(
            ItemStatus.QUEUED, progress=0, error=None, error_category=None, record=None
        )

    def start_encoding(self) -> UploadItem:
        return self._move(ItemStatus.ENCODING, progress=max(self.progress, 1))

    def encode_advanced(self, bytes_read: int, total_bytes: int) -> UploadItem:
        progress = max(self.progress, encode_progress(bytes_read, total_bytes))
        return self._move(ItemStatus.ENCODING, progress=progress)

    def start_uploading(self) -> UploadItem:
        return self._move(ItemStatus.UPLOADING, progress=max(self.progress, TRANSMIT_PHASE_MIN))

    def transmit_advanced(self, bytes_sent: int, total_bytes: int) -> UploadItem:
        progress = max(self.progress, transmit_progress(bytes_sent, total_bytes))
        return self._move(ItemStatus.UPLOADING, progress=progress)

    def succeed(self, record: Photo | None = None) -> UploadItem:
        return self._move(ItemStatus.SUCCESS, progress=COMPLETE, record=record)

    def fail(self, message: str, category: str = "internal") -> UploadItem:
        # The bar reads "done" for failures too; the status carries the outcome.
        return self._move(
            ItemStatus.ERROR,
            progress=COMPLETE,
            error=message or "Upload failed",
            error_category=category,
        )

    def to_dict(self) -> dict[str, object]:
        """Presentation view of the item."""
        data: dict[str, object] = {
            "id": self.id,
            "name": self.source.name,
            "size": self.source.size,
            "status": self.status.value,
            "progress": self.progress,
        }
        if self.error is not None:
            data["error"] = self.error
            data["error_category"] = self.error_category
        if self.record is not None:
            data["photo_id"] = self.record.photo_id
            data["tags"] = list(self.record.tags)
        return data
