"""Slug codec: document path relative to the content root <-> slug.

``notes/intro.md`` and ``notes\\intro.md`` both map to ``notes/intro``. No
case or whitespace normalisation is applied, so two paths that differ only
in separator style share a slug.
"""

import os
import re
from pathlib import PurePosixPath

from notedex.errors import SlugValidationError

DOCUMENT_EXTENSION = ".md"
MAX_SLUG_LENGTH = 512

_SLUG_CHARS_RE = re.compile(r"[A-Za-z0-9/_-]+")


def is_document_path(path: str) -> bool:
    """Return True when *path* names a document file."""
    return path.endswith(DOCUMENT_EXTENSION)


def path_to_slug(relative_path: str) -> str:
    """Return the slug for a document path relative to the content root."""
    slug = relative_path.replace("\\", "/")
    if os.sep != "/":
        slug = slug.replace(os.sep, "/")
    if slug.endswith(DOCUMENT_EXTENSION):
        slug = slug[: -len(DOCUMENT_EXTENSION)]
    return slug


def slug_to_path(slug: str) -> str:
    """Return the POSIX relative document path for *slug*."""
    return str(PurePosixPath(slug + DOCUMENT_EXTENSION))


def validate_slug(slug: str) -> str:
    """Return *slug* unchanged if it is safe to use as a lookup key and output path.

    Slugs from an untrusted boundary are also turned into filesystem paths,
    so parent-directory segments and anything outside ``[A-Za-z0-9/_-]``
    are rejected.

    Raises:
        SlugValidationError: if the slug is empty, too long, contains
            disallowed characters, or has an empty path segment.
    """
    if not slug:
        raise SlugValidationError("Slug must not be empty.")
    if len(slug) > MAX_SLUG_LENGTH:
        raise SlugValidationError(f"Slug exceeds {MAX_SLUG_LENGTH} characters.")
    if not _SLUG_CHARS_RE.fullmatch(slug):
        raise SlugValidationError("Slug contains unsafe characters.")
    # "." is outside the character set, so only empty segments remain to check
    if "" in slug.split("/"):
        raise SlugValidationError("Slug contains an empty path segment.")
    return slug
