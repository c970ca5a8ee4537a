"""Tests for upload item transitions and progress blending."""

from __future__ import annotations

from pathlib import Path

import pytest

from photoctl.core.exceptions import StateTransitionError
from photoctl.models.item import FileSource, ItemStatus, UploadItem
from photoctl.models.photo import Photo
from photoctl.models.progress import BatchSummary, RunResult, encode_progress, transmit_progress


def _item() -> UploadItem:
    return UploadItem.create(FileSource(path=Path("a.jpg"), name="a.jpg", size=10))


class TestProgressBlending:
    """Tests for the two-phase progress mapping."""

    @pytest.mark.parametrize(
        "done,total,expected",
        [(0, 100, 1), (1, 1000, 1), (50, 100, 30), (100, 100, 60), (0, 0, 60), (200, 100, 60)],
    )
    def test_encode_range(self, done, total, expected):
        assert encode_progress(done, total) == expected

    @pytest.mark.parametrize(
        "done,total,expected",
        [(0, 100, 61), (50, 100, 80), (100, 100, 99), (0, 0, 99)],
    )
    def test_transmit_range(self, done, total, expected):
        assert transmit_progress(done, total) == expected

    def test_phases_never_overlap_or_reach_complete(self):
        encode = {encode_progress(i, 1000) for i in range(1001)}
        transmit = {transmit_progress(i, 1000) for i in range(1001)}

        assert max(encode) == 60
        assert min(transmit) == 61
        assert 100 not in transmit


class TestItemTransitions:
    """Tests for UploadItem lifecycle."""

    def test_new_item_is_queued(self):
        item = _item()

        assert item.status is ItemStatus.QUEUED
        assert item.progress == 0
        assert item.error is None

    def test_ids_are_unique(self):
        assert _item().id != _item().id

    def test_happy_path(self):
        record = Photo(photo_id=3, file_name="a.jpg")
        item = _item().start_encoding()
        assert (item.status, item.progress) == (ItemStatus.ENCODING, 1)

        item = item.encode_advanced(10, 10)
        assert item.progress == 60

        item = item.start_uploading()
        assert (item.status, item.progress) == (ItemStatus.UPLOADING, 61)

        item = item.transmit_advanced(5, 10).succeed(record)
        assert item.status is ItemStatus.SUCCESS
        assert item.progress == 100
        assert item.record == record

    def test_progress_never_decreases(self):
        item = _item().start_encoding().encode_advanced(8, 10)
        before = item.progress

        item = item.encode_advanced(2, 10)

        assert item.progress == before

    def test_fail_sets_complete_and_message(self):
        item = _item().start_encoding().fail("boom", "server")

        assert item.status is ItemStatus.ERROR
        assert item.progress == 100
        assert item.error == "boom"
        assert item.error_category == "server"

    def test_fail_without_message_uses_default(self):
        item = _item().fail("")

        assert item.error == "Upload failed"
        assert item.error_category == "internal"

    def test_requeue_clears_error(self):
        item = _item().fail("boom", "client").requeue()

        assert item.status is ItemStatus.QUEUED
        assert item.progress == 0
        assert item.error is None
        assert item.error_category is None

    def test_requeue_queued_item_is_allowed(self):
        item = _item()

        assert item.requeue().status is ItemStatus.QUEUED

    @pytest.mark.parametrize(
        "build,move",
        [
            (lambda i: i, UploadItem.start_uploading),
            (lambda i: i.start_encoding(), UploadItem.succeed),
            (lambda i: i.succeed(), UploadItem.start_encoding),
            (lambda i: i.fail("x"), UploadItem.start_uploading),
            (lambda i: i.start_encoding().start_uploading(), UploadItem.start_encoding),
            (lambda i: i.start_encoding(), UploadItem.requeue),
        ],
    )
    def test_illegal_transitions_raise(self, build, move):
        item = build(_item())

        with pytest.raises(StateTransitionError):
            move(item)

    def test_items_are_immutable(self):
        item = _item()
        moved = item.start_encoding()

        assert item.status is ItemStatus.QUEUED
        assert moved is not item
        with pytest.raises(AttributeError):
            item.progress = 5  # type: ignore[misc]

    def test_to_dict_for_failure_and_success(self):
        failed = _item().fail("bad", "client").to_dict()
        stored = _item().succeed(Photo(photo_id=7, file_name="a.jpg", tags=["x"])).to_dict()

        assert failed["status"] == "error"
        assert failed["error_category"] == "client"
        assert "photo_id" not in failed
        assert stored["photo_id"] == 7
        assert stored["tags"] == ["x"]
        assert "error" not in stored


class TestSummaries:
    """Tests for batch and run summaries."""

    def test_batch_summary_queued(self):
        summary = BatchSummary(total=5, success=1, failed=1, in_progress=2)

        assert summary.queued == 1
        assert summary.to_dict() == {"total": 5, "success": 1, "failed": 1, "in_progress": 2}

    def test_run_result(self):
        result = RunResult(attempted=4, succeeded=3, failed=1, duration=0.5)

        assert result.had_failure
        assert result.success_rate == 75.0
        assert RunResult(attempted=0, succeeded=0, failed=0, duration=0).success_rate == 100.0

    def test_run_result_excludes_skipped_from_rate(self):
        result = RunResult(attempted=4, succeeded=1, failed=1, duration=0.5, skipped=2)

        assert result.success_rate == 50.0
        everything_skipped = RunResult(attempted=2, succeeded=0, failed=0, duration=0, skipped=2)
        assert everything_skipped.success_rate == 100.0
