"""Tests for notedex.services.store.PageStore."""

from pathlib import Path

from notedex.models.page import PageMetadata, PageRecord
from notedex.services.store import PageStore


def _record(slug: str, title: str = "", body: str = "<p>body</p>") -> PageRecord:
    return PageRecord(
        slug=slug,
        title=title or slug,
        body=body,
        metadata=PageMetadata(title=title or None),
        source_path=Path(f"/content/{slug}.md"),
        relative_path=f"{slug}.md",
    )


class TestPageStore:
    def test_get_missing_returns_none(self):
        assert PageStore().get("nope") is None

    def test_upsert_then_get(self):
        store = PageStore()
        store.upsert(_record("a", "Alpha", "<p>A body</p>"))
        record = store.get("a")
        assert record.title == "Alpha"
        assert record.body == "<p>A body</p>"

    def test_upsert_replaces_whole_record(self):
        store = PageStore()
        old = _record("a", "Old")
        new = _record("a", "New", "<p>new</p>")
        store.upsert(old)
        store.upsert(new)
        assert store.get("a") is new
        assert old.title == "Old"
        assert len(store) == 1

    def test_delete(self):
        store = PageStore()
        store.upsert(_record("a"))
        store.delete("a")
        assert store.get("a") is None
        assert "a" not in store

    def test_delete_missing_is_noop(self):
        store = PageStore()
        store.delete("missing")
        assert len(store) == 0

    def test_snapshot_is_a_copy_in_insertion_order(self):
        store = PageStore()
        for slug in ("c", "a", "b"):
            store.upsert(_record(slug))
        snapshot = store.snapshot()
        store.delete("a")
        assert [r.slug for r in snapshot] == ["c", "a", "b"]
        assert store.slugs() == ["c", "b"]

    def test_clear(self):
        store = PageStore()
        store.upsert(_record("a"))
        store.upsert(_record("b"))
        store.clear()
        assert len(store) == 0
        assert store.snapshot() == []
