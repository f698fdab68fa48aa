"""Authoritative slug -> PageRecord mapping.

Every method runs to completion without awaiting, so on the event loop each
call is atomic with respect to readers. Records are immutable; an update
swaps the whole record.
"""

from typing import Dict, Iterator, List, Optional

from notedex.models.page import PageRecord


class PageStore:
    def __init__(self) -> None:
        self._records: Dict[str, PageRecord] = {}

    def get(self, slug: str) -> Optional[PageRecord]:
        return self._records.get(slug)

    def upsert(self, record: PageRecord) -> None:
        """Insert *record*, replacing any record under the same slug."""
        self._records[record.slug] = record

    def delete(self, slug: str) -> None:
        """Remove *slug* if present."""
        self._records.pop(slug, None)

    def snapshot(self) -> List[PageRecord]:
        """Return a point-in-time copy of all records in insertion order."""
        return list(self._records.values())

    def clear(self) -> None:
        self._records.clear()

    def slugs(self) -> List[str]:
        return list(self._records)

    def __contains__(self, slug: object) -> bool:
        return slug in self._records

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[PageRecord]:
        return iter(self.snapshot())
