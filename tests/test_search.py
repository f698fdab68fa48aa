"""Tests for notedex.services.search.search."""

from pathlib import Path

import pytest

from notedex.errors import QueryTooLargeError
from notedex.models.page import PageMetadata, PageRecord
from notedex.services.search import MAX_QUERY_LENGTH, SEARCH_RESULT_LIMIT, search


def _record(slug: str, title: str, body: str = "", description: str | None = None) -> PageRecord:
    return PageRecord(
        slug=slug,
        title=title,
        body=body,
        metadata=PageMetadata(title=title, description=description),
        source_path=Path(f"/content/{slug}.md"),
        relative_path=f"{slug}.md",
    )


_RECORDS = [
    _record("a", "Alpha", "<p>The first letter.</p>", description="First"),
    _record("b", "Beta", "<p>Mentions ALPHA in the body.</p>"),
    _record("g", "Gamma", "<p>Unrelated.</p>"),
]


class TestSearchMatching:
    def test_matches_title_case_insensitively(self):
        results = search("gAmMa", _RECORDS)
        assert [r.slug for r in results] == ["g"]

    def test_matches_body(self):
        results = search("mentions", _RECORDS)
        assert [r.slug for r in results] == ["b"]

    def test_keeps_snapshot_order(self):
        results = search("alpha", _RECORDS)
        assert [r.slug for r in results] == ["a", "b"]

    def test_no_match_returns_empty(self):
        assert search("zeta", _RECORDS) == []

    def test_result_fields(self):
        result = search("first letter", _RECORDS)[0]
        assert result.slug == "a"
        assert result.title == "Alpha"
        assert result.description == "First"
        assert "body" not in result.model_dump()


class TestSearchEmptyQuery:
    @pytest.mark.parametrize("query", [None, "", "   "])
    def test_returns_empty_not_everything(self, query):
        assert search(query, _RECORDS) == []


class TestSearchLimits:
    def test_results_capped(self):
        records = [_record(f"n{i}", f"Note {i}") for i in range(SEARCH_RESULT_LIMIT + 5)]
        results = search("note", records)
        assert len(results) == SEARCH_RESULT_LIMIT
        assert results[0].slug == "n0"

    def test_custom_limit(self):
        assert len(search("a", _RECORDS, limit=1)) == 1

    def test_query_too_large_rejected(self):
        with pytest.raises(QueryTooLargeError):
            search("x" * (MAX_QUERY_LENGTH + 1), _RECORDS)

    def test_query_at_limit_accepted(self):
        assert search("x" * MAX_QUERY_LENGTH, _RECORDS) == []
