"""Document parser: YAML front matter + Markdown body -> (metadata, safe HTML)."""

import re
from typing import Any, Dict, Iterable, Protocol, Tuple

import markdown
import yaml

from notedex.errors import DocumentParseError
from notedex.services.sanitizer import sanitize

# GFM-style tables and fenced code, single newlines rendered as <br>
DEFAULT_EXTENSIONS = ("extra", "nl2br", "sane_lists")

_FRONT_MATTER_RE = re.compile(
    r"\A---[ \t]*\r?\n(?P<yaml>.*?)^---[ \t]*(?:\r?\n|\Z)",
    re.DOTALL | re.MULTILINE,
)


class DocumentParser(Protocol):
    def parse(self, text: str) -> Tuple[Dict[str, Any], str]:
        """Return ``(front_matter, sanitized_html)`` for a raw document."""
        ...


def split_front_matter(text: str) -> Tuple[Dict[str, Any], str]:
    """Split a leading ``---`` delimited YAML block from *text*.

    Returns:
        ``(metadata, body)``; metadata is empty when there is no front matter.

    Raises:
        DocumentParseError: if the block is not valid YAML or not a mapping.
    """
    text = text.lstrip("\ufeff")
    match = _FRONT_MATTER_RE.match(text)
    if not match:
        return {}, text

    try:
        data = yaml.safe_load(match.group("yaml"))
    except yaml.YAMLError as exc:
        raise DocumentParseError(f"Invalid YAML front matter: {exc}") from exc

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise DocumentParseError("Front matter must be a mapping of keys to values.")

    return data, text[match.end():]


class MarkdownParser:
    """Default parser: Python-Markdown rendering followed by sanitization."""

    def __init__(self, extensions: Iterable[str] = DEFAULT_EXTENSIONS) -> None:
        self._extensions = list(extensions)

    def render(self, body: str) -> str:
        return markdown.markdown(body, extensions=self._extensions)

    def parse(self, text: str) -> Tuple[Dict[str, Any], str]:
        metadata, body = split_front_matter(text)
        return metadata, sanitize(self.render(body))
