"""Preview references for selected files.

A preview reference is a short token that resolves to the local file for
display. Each one is acquired when an item is created and must be released
when the item is discarded; ``active`` exposes what is still held.
"""

from __future__ import annotations

import logging
import secrets
import threading
from pathlib import Path

from photoctl.models.item import FileSource

logger = logging.getLogger(__name__)

PREVIEW_SCHEME = "preview://"


class PreviewRegistry:
    """Registry of live preview references."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._refs: dict[str, Path] = {}

    def acquire(self, source: FileSource) -> str:
        """Create a new reference to a source's content."""
        ref = f"{PREVIEW_SCHEME}{secrets.token_hex(8)}"
        with self._lock:
            self._refs[ref] = source.path
        return ref

    def resolve(self, ref: str) -> Path:
        """Return the local path behind a live reference.

        Raises:
            KeyError: If the reference was never acquired or was released.
        """
        with self._lock:
            try:
                return self._refs[ref]
            except KeyError:
                raise KeyError(f"Preview reference not active: {ref}") from None

    def release(self, ref: str) -> bool:
        """Release a reference. Returns False if it was not held."""
        with self._lock:
            released = self._refs.pop(ref, None) is not None
        if not released:
            logger.debug("Preview %s already released", ref)
        return released

    def release_all(self) -> int:
        """Release every held reference, returning how many were held."""
        with self._lock:
            count = len(self._refs)
            self._refs.clear()
        return count

    @property
    def active(self) -> int:
        """Number of references still held."""
        with self._lock:
            return len(self._refs)

    def is_active(self, ref: str) -> bool:
        with self._lock:
            return ref in self._refs
