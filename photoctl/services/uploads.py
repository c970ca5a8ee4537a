"""Upload service for batch photo uploads.

UploadService owns the item set of one selection and drives batch runs:

- select: replace the batch with new files
- submit: upload every item of the batch
- retry_failed: re-run only the items that ended in error

Item state lives in an ItemStore and is only read through snapshots, so the
summary and the per-item view are derived from the same data.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Iterable
from pathlib import Path
from typing import TYPE_CHECKING, Union

from photoctl.core.exceptions import RETRYABLE_CATEGORIES
from photoctl.core.logging import LogContext
from photoctl.core.validation import validate_upload_path, validate_workers
from photoctl.models.item import FileSource, ItemStatus, UploadItem
from photoctl.models.progress import BatchSummary, RunResult
from photoctl.uploaders.constants import DEFAULT_UPLOAD_WORKERS
from photoctl.uploaders.encoder import encode_source
from photoctl.uploaders.previews import PreviewRegistry
from photoctl.uploaders.scheduler import Encoder, PayloadSender, UploadScheduler
from photoctl.uploaders.state import ChangeListener, ItemStore
from photoctl.uploaders.transport import Transport

if TYPE_CHECKING:
    from photoctl.core.client import StoreClient

logger = logging.getLogger(__name__)

# =============================================================================
# Constants
# =============================================================================

SUBMIT_FAILED_MESSAGE = "Some uploads failed. Fix issues and retry failed items."
RETRY_FAILED_MESSAGE = "Retry completed with errors. Check failed items."

Selectable = Union[str, Path, FileSource]


def _to_source(entry: Selectable) -> FileSource:
    if isinstance(entry, FileSource):
        return entry
    return FileSource.from_path(validate_upload_path(Path(entry)))


class UploadService:
    """Batch controller for photo uploads."""

    def __init__(
        self,
        client: StoreClient | None = None,
        *,
        transport: PayloadSender | None = None,
        encoder: Encoder = encode_source,
        workers: int = DEFAULT_UPLOAD_WORKERS,
        on_success: Callable[[], None] | None = None,
        on_change: ChangeListener | None = None,
        previews: PreviewRegistry | None = None,
    ) -> None:
        """Initialize the service.

        Args:
            client: Store client used to build the default transport.
            transport: Payload sender; defaults to a Transport over ``client``.
            encoder: Encoder callable; defaults to chunked base64.
            workers: Maximum concurrent items per run.
            on_success: Called after a run in which every item succeeded.
            on_change: Called with each item snapshot as it changes.
            previews: Preview registry; a private one is created if omitted.
        """
        if transport is None:
            if client is None:
                raise ValueError("Either client or transport is required")
            transport = Transport(client)

        self.client = client
        self.previews = previews or PreviewRegistry()
        self.store = ItemStore(on_change)
        self.scheduler = UploadScheduler(
            self.store,
            encoder,
            transport,
            concurrency=validate_workers(workers),
        )
        self.on_success = on_success

        self._run_lock = threading.Lock()
        self._state_lock = threading.RLock()
        self._generation = 0
        self._message: str | None = None

    # =========================================================================
    # Read Side
    # =========================================================================

    @property
    def items(self) -> list[UploadItem]:
        """Current items in selection order."""
        return self.store.snapshot()

    @property
    def summary(self) -> BatchSummary:
        """Aggregate counts, derived fresh on every read."""
        return self.store.summary()

    @property
    def message(self) -> str | None:
        """Advisory message from the last run, if it had failures."""
        with self._state_lock:
            return self._message

    @property
    def is_submitting(self) -> bool:
        """Check if a batch run is in flight."""
        return self._run_lock.locked()

    @property
    def has_failed_items(self) -> bool:
        return self.summary.failed > 0

    def get(self, item_id: str) -> UploadItem | None:
        return self.store.get(item_id)

    # =========================================================================
    # Selection
    # =========================================================================

    def select(self, files: Iterable[Selectable]) -> list[UploadItem]:
        """Replace the batch with a new selection.

        Previews of the previous items are released. An empty selection clears
        the batch. A run already in flight keeps going on its own ids; its
        later updates no longer reach the new batch.

        Raises:
            ValidationError: If a path is missing or not a regular file.
        """
        sources = [_to_source(entry) for entry in files]
        items = [UploadItem.create(src, self.previews.acquire(src)) for src in sources]

        with self._state_lock:
            self._generation += 1
            self._message = None
            discarded = self.store.reset(items)

        for old in discarded:
            self.previews.release(old.preview_ref)

        logger.debug("Selected %d files (released %d previews)", len(items), len(discarded))
        return items

    # =========================================================================
    # Runs
    # =========================================================================

    def submit(self) -> RunResult | None:
        """Upload the whole batch.

        Returns:
            RunResult, or None when the batch is empty or a run is in flight.
        """
        if not self._run_lock.acquire(blocking=False):
            logger.info("Submit ignored: a batch run is already in flight")
            return None
        try:
            with self._state_lock:
                targets = [item.id for item in self.store.snapshot()]
                if not targets:
                    return None
                generation = self._generation
                self._message = None
                for item_id in targets:
                    self.store.update(item_id, UploadItem.requeue)

            result = self._run("submit", targets)
            self._finish(result, generation, SUBMIT_FAILED_MESSAGE)
            return result
        finally:
            self._run_lock.release()

    def retry_failed(self) -> RunResult | None:
        """Re-run only the items currently in error.

        Returns:
            RunResult, or None when nothing failed or a run is in flight.
        """
        if not self._run_lock.acquire(blocking=False):
            logger.info("Retry ignored: a batch run is already in flight")
            return None
        try:
            with self._state_lock:
                targets = self.store.ids_with_status(ItemStatus.ERROR)
                if not targets:
                    return None
                generation = self._generation
                self._message = None
                for item_id in targets:
                    self.store.update(item_id, UploadItem.requeue)

            result = self._run("retry", targets)
            self._finish(result, generation, RETRY_FAILED_MESSAGE)
            return result
        finally:
            self._run_lock.release()

    def _run(self, kind: str, targets: list[str]) -> RunResult:
        with LogContext(
            "upload batch",
            logger,
            run=kind,
            items=len(targets),
            workers=self.scheduler.concurrency,
        ) as ctx:
            result = self.scheduler.run(targets)
            if result.skipped:
                ctx.info("%d items left the batch before finishing", result.skipped)
            if result.had_failure:
                ctx.warning("%d of %d items failed", result.failed, result.attempted)
            else:
                ctx.info("%d items stored (%.0f%%)", result.succeeded, result.success_rate)
        return result

    def _finish(self, result: RunResult, generation: int, failure_message: str) -> None:
        with self._state_lock:
            if generation != self._generation:
                logger.info("Batch was replaced during the run; discarding its outcome")
                return
            if result.had_failure:
                self._message = self._advisory(failure_message)
                return

        if self.on_success is not None:
            self.on_success()

    def _advisory(self, base: str) -> str:
        failed = [i for i in self.store.snapshot() if i.status is ItemStatus.ERROR]
        transient = sum(1 for i in failed if i.error_category in RETRYABLE_CATEGORIES)
        permanent = len(failed) - transient
        if not failed:
            return base
        return f"{base} ({transient} server or network, {permanent} client or local)"

    # =========================================================================
    # Teardown
    # =========================================================================

    def close(self) -> None:
        """Discard the batch and release every preview it holds."""
        with self._state_lock:
            self._generation += 1
            self._message = None
            discarded = self.store.reset([])
        for item in discarded:
            self.previews.release(item.preview_ref)

    def __enter__(self) -> UploadService:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()
