import datetime as dt
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

# Values kept in the open metadata bag. Anything else YAML can produce
# (nested mappings, nulls inside lists, ...) is converted to text.
MetadataValue = Union[bool, int, float, dt.datetime, dt.date, str, List[str]]

_WELL_KNOWN_KEYS = frozenset({"title", "description", "date", "tags"})


def _coerce_value(value: Any) -> Optional[MetadataValue]:
    if value is None:
        return None
    if isinstance(value, (bool, int, float, dt.date, str)):
        return value
    if isinstance(value, (list, tuple, set)):
        return [str(item) for item in value if item is not None]
    return str(value)


def _coerce_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _coerce_tags(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, (list, tuple, set)):
        items = value
    else:
        items = [value]
    return [str(item).strip() for item in items if item is not None and str(item).strip()]


def _coerce_date(value: Any) -> Optional[dt.date]:
    if isinstance(value, dt.date):
        return value
    if isinstance(value, str):
        try:
            return dt.datetime.fromisoformat(value.strip())
        except ValueError:
            return None
    return None


class PageMetadata(BaseModel):
    """Front-matter of one document.

    ``title``, ``description``, ``date`` and ``tags`` are pulled out
    explicitly; every other key is kept in ``extra``.
    """

    model_config = ConfigDict(frozen=True)

    title: Optional[str] = None
    description: Optional[str] = None
    date: Optional[Union[dt.datetime, dt.date]] = None
    tags: List[str] = Field(default_factory=list)
    extra: Dict[str, MetadataValue] = Field(default_factory=dict)

    @classmethod
    def from_front_matter(cls, data: Mapping[str, Any]) -> "PageMetadata":
        """Build metadata from a parsed front-matter mapping."""
        extra: Dict[str, MetadataValue] = {}
        for key, value in data.items():
            key = str(key)
            if key in _WELL_KNOWN_KEYS:
                continue
            coerced = _coerce_value(value)
            if coerced is not None:
                extra[key] = coerced

        date = _coerce_date(data.get("date"))
        if date is None and data.get("date") is not None:
            # Unparseable dates are kept verbatim rather than dropped
            extra["date"] = str(data["date"])

        return cls(
            title=_coerce_text(data.get("title")),
            description=_coerce_text(data.get("description")),
            date=date,
            tags=_coerce_tags(data.get("tags")),
            extra=extra,
        )

    def as_dict(self) -> Dict[str, MetadataValue]:
        """Flatten back into a single key/value bag (well-known keys win)."""
        merged: Dict[str, MetadataValue] = dict(self.extra)
        if self.title is not None:
            merged["title"] = self.title
        if self.description is not None:
            merged["description"] = self.description
        if self.date is not None:
            merged["date"] = self.date
        if self.tags:
            merged["tags"] = list(self.tags)
        return merged


class PageRecord(BaseModel):
    """One parsed document, keyed by its slug in the page store.

    Records are never mutated: an edit on disk produces a new record that
    replaces the old one under the same slug.
    """

    model_config = ConfigDict(frozen=True)

    slug: str
    title: str
    body: str  # sanitized HTML
    metadata: PageMetadata
    source_path: Path
    relative_path: str
