"""Tests for the shared item store and preview registry."""

from __future__ import annotations

from pathlib import Path

import pytest

from photoctl.models.item import FileSource, ItemStatus, UploadItem
from photoctl.uploaders.previews import PreviewRegistry
from photoctl.uploaders.state import ItemStore


def _items(count: int) -> list[UploadItem]:
    return [
        UploadItem.create(FileSource(path=Path(f"{i}.jpg"), name=f"{i}.jpg", size=1))
        for i in range(count)
    ]


class TestItemStore:
    """Tests for ItemStore."""

    def test_snapshot_keeps_selection_order(self):
        items = _items(3)
        store = ItemStore()
        store.reset(items)

        assert [i.id for i in store.snapshot()] == [i.id for i in items]
        assert len(store) == 3
        assert items[0].id in store

    def test_update_replaces_by_id_and_notifies(self):
        seen: list[UploadItem] = []
        store = ItemStore(on_change=seen.append)
        item = _items(1)[0]
        store.reset([item])

        updated = store.update(item.id, UploadItem.start_encoding)

        assert updated.status is ItemStatus.ENCODING
        assert store.get(item.id) == updated
        assert seen == [updated]

    def test_update_for_unknown_id_is_ignored(self):
        seen: list[UploadItem] = []
        store = ItemStore(on_change=seen.append)

        assert store.update("missing", UploadItem.start_encoding) is None
        assert seen == []

    def test_reset_returns_discarded_items(self):
        old = _items(2)
        store = ItemStore()
        store.reset(old)

        discarded = store.reset(_items(1))

        assert discarded == old
        assert len(store) == 1

    def test_failing_listener_does_not_break_update(self):
        store = ItemStore()
        calls: list[str] = []

        def broken(item: UploadItem) -> None:
            raise RuntimeError("listener bug")

        store.subscribe(broken)
        store.subscribe(lambda item: calls.append(item.id))
        item = _items(1)[0]
        store.reset([item])

        store.update(item.id, UploadItem.start_encoding)

        assert calls == [item.id]
        assert store.get(item.id).status is ItemStatus.ENCODING

    def test_unsubscribe(self):
        seen: list[UploadItem] = []
        store = ItemStore()
        store.subscribe(seen.append)
        store.unsubscribe(seen.append)
        item = _items(1)[0]
        store.reset([item])

        store.update(item.id, UploadItem.start_encoding)

        assert seen == []

    def test_summary_counts(self):
        a, b, c, d = _items(4)
        store = ItemStore()
        store.reset([a, b, c, d])
        store.update(a.id, UploadItem.succeed)
        store.update(b.id, lambda i: i.fail("x"))
        store.update(c.id, UploadItem.start_encoding)

        summary = store.summary()

        assert (summary.total, summary.success, summary.failed, summary.in_progress) == (4, 1, 1, 1)
        assert summary.queued == 1
        assert store.ids_with_status(ItemStatus.ERROR) == [b.id]


class TestPreviewRegistry:
    """Tests for PreviewRegistry."""

    def test_acquire_resolve_release(self):
        registry = PreviewRegistry()
        source = FileSource(path=Path("a.jpg"), name="a.jpg", size=1)

        ref = registry.acquire(source)

        assert ref.startswith("preview://")
        assert registry.resolve(ref) == Path("a.jpg")
        assert registry.active == 1
        assert registry.release(ref) is True
        assert registry.active == 0
        assert not registry.is_active(ref)

    def test_each_acquire_is_distinct(self):
        registry = PreviewRegistry()
        source = FileSource(path=Path("a.jpg"), name="a.jpg", size=1)

        assert registry.acquire(source) != registry.acquire(source)
        assert registry.active == 2

    def test_double_release_is_harmless(self):
        registry = PreviewRegistry()
        ref = registry.acquire(FileSource(path=Path("a.jpg"), name="a.jpg", size=1))
        registry.release(ref)

        assert registry.release(ref) is False

    def test_resolve_released_ref_raises(self):
        registry = PreviewRegistry()
        ref = registry.acquire(FileSource(path=Path("a.jpg"), name="a.jpg", size=1))
        registry.release(ref)

        with pytest.raises(KeyError):
            registry.resolve(ref)

    def test_release_all(self):
        registry = PreviewRegistry()
        for _ in range(3):
            registry.acquire(FileSource(path=Path("a.jpg"), name="a.jpg", size=1))

        assert registry.release_all() == 3
        assert registry.active == 0
