from typing import Iterable, List, Optional

from notedex.errors import QueryTooLargeError
from notedex.models.page import PageRecord
from notedex.models.response import SearchResult

SEARCH_RESULT_LIMIT = 20
MAX_QUERY_LENGTH = 256


def search(
    query: Optional[str],
    records: Iterable[PageRecord],
    limit: int = SEARCH_RESULT_LIMIT,
) -> List[SearchResult]:
    """Return up to *limit* records whose title or body contains *query*.

    Matching is a case-insensitive substring test; results keep the order of
    *records*. An empty query matches nothing.

    Raises:
        QueryTooLargeError: if *query* is longer than ``MAX_QUERY_LENGTH``.
    """
    if query is not None and len(query) > MAX_QUERY_LENGTH:
        raise QueryTooLargeError(f"Query exceeds {MAX_QUERY_LENGTH} characters.")

    needle = (query or "").strip().lower()
    if not needle:
        return []

    results: List[SearchResult] = []
    for record in records:
        if needle in record.title.lower() or needle in record.body.lower():
            results.append(
                SearchResult(
                    slug=record.slug,
                    title=record.title,
                    description=record.metadata.description,
                )
            )
            if len(results) >= limit:
                break
    return results
