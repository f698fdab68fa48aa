import asyncio
from pathlib import Path, PurePath

from notedex.models.page import PageMetadata, PageRecord
from notedex.services.parser import DocumentParser
from notedex.services.slugs import DOCUMENT_EXTENSION, path_to_slug


def _read_text(path: Path) -> str:
    return path.read_text(encoding="utf-8")


def _fallback_title(relative_path: str) -> str:
    name = PurePath(relative_path.replace("\\", "/")).name
    if name.endswith(DOCUMENT_EXTENSION):
        name = name[: -len(DOCUMENT_EXTENSION)]
    return name


async def load_document(source_path: Path, relative_path: str, parser: DocumentParser) -> PageRecord:
    """Read and parse one document into a :class:`PageRecord`.

    The file read and the parse both run in a worker thread. The caller owns
    insertion into the page store.

    Raises:
        OSError: if the file cannot be read.
        ValueError: if the file is not valid UTF-8 or its front matter is
            malformed (:class:`~notedex.errors.DocumentParseError`).
    """
    text = await asyncio.to_thread(_read_text, source_path)
    front_matter, html = await asyncio.to_thread(parser.parse, text)
    metadata = PageMetadata.from_front_matter(front_matter)

    return PageRecord(
        slug=path_to_slug(relative_path),
        title=metadata.title or _fallback_title(relative_path),
        body=html,
        metadata=metadata,
        source_path=source_path,
        relative_path=relative_path.replace("\\", "/"),
    )
