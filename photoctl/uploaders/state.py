"""Shared item store for a batch.

The store is the only mutable state shared between workers and readers.
Every write swaps a whole item by id under a lock; reads take snapshots
under the same lock, so the summary and the per-item view always agree.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Iterable

from photoctl.models.item import ItemStatus, UploadItem
from photoctl.models.progress import BatchSummary

logger = logging.getLogger(__name__)

ChangeListener = Callable[[UploadItem], None]


class ItemStore:
    """Ordered mapping of upload items keyed by id."""

    def __init__(self, on_change: ChangeListener | None = None) -> None:
        self._lock = threading.Lock()
        self._items: dict[str, UploadItem] = {}
        self._listeners: list[ChangeListener] = []
        if on_change is not None:
            self._listeners.append(on_change)

    def subscribe(self, listener: ChangeListener) -> None:
        """Register a callback invoked with each replaced item."""
        with self._lock:
            self._listeners.append(listener)

    def unsubscribe(self, listener: ChangeListener) -> None:
        with self._lock:
            if listener in self._listeners:
                self._listeners.remove(listener)

    def reset(self, items: Iterable[UploadItem]) -> list[UploadItem]:
        """Replace the whole item set, returning the discarded items."""
        new_items = {item.id: item for item in items}
        with self._lock:
            old = list(self._items.values())
            self._items = new_items
        return old

    def get(self, item_id: str) -> UploadItem | None:
        with self._lock:
            return self._items.get(item_id)

    def __contains__(self, item_id: object) -> bool:
        with self._lock:
            return item_id in self._items

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)

    def update(
        self,
        item_id: str,
        change: Callable[[UploadItem], UploadItem],
    ) -> UploadItem | None:
        """Apply a transition to one item and swap the result in.

        Updates addressed to ids no longer in the store (a superseded batch)
        are ignored and return None.
        """
        with self._lock:
            current = self._items.get(item_id)
            if current is None:
                logger.debug("Ignoring update for superseded item %s", item_id)
                return None
            updated = change(current)
            self._items[item_id] = updated
            listeners = list(self._listeners)

        for listener in listeners:
            try:
                listener(updated)
            except Exception:
                logger.exception("Change listener failed for item %s", item_id)
        return updated

    def snapshot(self) -> list[UploadItem]:
        """Items in selection order."""
        with self._lock:
            return list(self._items.values())

    def ids_with_status(self, status: ItemStatus) -> list[str]:
        with self._lock:
            return [item.id for item in self._items.values() if item.status is status]

    def summary(self) -> BatchSummary:
        """Derive aggregate counts from the current items."""
        items = self.snapshot()
        return BatchSummary(
            total=len(items),
            success=sum(1 for i in items if i.status is ItemStatus.SUCCESS),
            failed=sum(1 for i in items if i.status is ItemStatus.ERROR),
            in_progress=sum(1 for i in items if i.status.is_active),
        )
