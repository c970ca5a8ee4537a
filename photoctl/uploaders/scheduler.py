"""Bounded worker pool that runs items through encode and transmit.

Workers share a claim cursor over the target list and take the next
unclaimed item whenever they finish one, so a slow item never holds back
the others. Failures are recorded on the item and never stop the pool.
"""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable, Sequence
from concurrent.futures import ThreadPoolExecutor, as_completed
from enum import Enum
from typing import Protocol

from photoctl.core.exceptions import StateTransitionError, UploadError
from photoctl.models.item import FileSource, UploadItem
from photoctl.models.photo import Photo
from photoctl.models.progress import RunResult
from photoctl.uploaders.constants import DEFAULT_UPLOAD_WORKERS
from photoctl.uploaders.encoder import EncodedPayload
from photoctl.uploaders.state import ItemStore

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int], None]
Encoder = Callable[[FileSource, ProgressCallback], EncodedPayload]


class Outcome(Enum):
    """How one item's run ended, as counted in RunResult."""

    SUCCEEDED = "succeeded"
    FAILED = "failed"
    SKIPPED = "skipped"


class PayloadSender(Protocol):
    """Anything that can deliver an encoded payload to the store."""

    def send(
        self,
        payload: EncodedPayload,
        progress_callback: ProgressCallback | None = None,
    ) -> Photo: ...


class ClaimCursor:
    """Monotonic index over a target list; each index is handed out once."""

    def __init__(self, length: int) -> None:
        self._lock = threading.Lock()
        self._next = 0
        self.length = length

    def claim(self) -> int | None:
        """Return the next unclaimed index, or None when exhausted."""
        with self._lock:
            if self._next >= self.length:
                return None
            index = self._next
            self._next += 1
            return index

    @property
    def claimed(self) -> int:
        with self._lock:
            return min(self._next, self.length)


def _mark_failed(message: str, category: str) -> Callable[[UploadItem], UploadItem]:
    def change(item: UploadItem) -> UploadItem:
        if item.status.is_terminal:
            return item
        return item.fail(message, category)

    return change


class UploadScheduler:
    """Runs upload items through the encoder and transport with bounded concurrency."""

    def __init__(
        self,
        store: ItemStore,
        encoder: Encoder,
        transport: PayloadSender,
        concurrency: int = DEFAULT_UPLOAD_WORKERS,
    ) -> None:
        self.store = store
        self.encoder = encoder
        self.transport = transport
        self.concurrency = max(1, concurrency)

    def _process(self, item_id: str) -> tuple[Outcome, str | None]:
        """Run one item to a terminal state.

        Returns:
            The outcome plus, for failures, the error message recorded on the
            item. Items removed from the store mid-run are SKIPPED.
        """
        try:
            item = self.store.update(item_id, UploadItem.start_encoding)
        except StateTransitionError as e:
            logger.warning("Skipping item %s: %s", item_id, e.message)
            return Outcome.FAILED, f"{item_id}: {e.message}"
        if item is None:
            return Outcome.SKIPPED, None
        name = item.source.name

        def on_encode(done: int, total: int) -> None:
            self.store.update(item_id, lambda i: i.encode_advanced(done, total))

        def on_transmit(done: int, total: int) -> None:
            self.store.update(item_id, lambda i: i.transmit_advanced(done, total))

        try:
            payload = self.encoder(item.source, on_encode)
            self.store.update(item_id, UploadItem.start_uploading)
            record = self.transport.send(payload, on_transmit)
            if self.store.update(item_id, lambda i: i.succeed(record)) is None:
                logger.debug("Item %s left the batch before it was stored", name)
                return Outcome.SKIPPED, None
            return Outcome.SUCCEEDED, None
        except UploadError as e:
            logger.warning("Upload of %s failed [%s]: %s", name, e.category, e.message)
            message = e.message
            category = e.category
        except Exception as e:
            logger.exception("Unexpected error uploading %s", name)
            message = str(e) or "Upload failed"
            category = "internal"

        if self.store.update(item_id, _mark_failed(message, category)) is None:
            return Outcome.SKIPPED, None
        return Outcome.FAILED, f"{name}: {message}"

    def run(self, item_ids: Sequence[str]) -> RunResult:
        """Process every id exactly once and wait for all workers.

        Args:
            item_ids: Target ids in selection order.

        Returns:
            RunResult with per-run counts and error lines.
        """
        targets = list(item_ids)
        start = time.time()
        if not targets:
            return RunResult(attempted=0, succeeded=0, failed=0, duration=0.0)

        cursor = ClaimCursor(len(targets))
        outcome_lock = threading.Lock()
        errors: list[str] = []
        succeeded = 0
        skipped = 0

        def worker() -> None:
            nonlocal succeeded, skipped
            while (index := cursor.claim()) is not None:
                outcome, error = self._process(targets[index])
                with outcome_lock:
                    if outcome is Outcome.SUCCEEDED:
                        succeeded += 1
                    elif outcome is Outcome.SKIPPED:
                        skipped += 1
                    else:
                        errors.append(error)

        worker_count = min(self.concurrency, len(targets))
        logger.debug("Starting %d workers for %d items", worker_count, len(targets))

        with ThreadPoolExecutor(max_workers=worker_count, thread_name_prefix="upload") as executor:
            futures = [executor.submit(worker) for _ in range(worker_count)]
            for future in as_completed(futures):
                future.result()

        return RunResult(
            attempted=len(targets),
            succeeded=succeeded,
            failed=len(errors),
            duration=time.time() - start,
            errors=errors,
            skipped=skipped,
        )
