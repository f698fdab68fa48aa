"""Exception types raised by the content index.

Unreadable files and directories surface as the builtin :class:`OSError`.
Everything rejected because of its *content* derives from :class:`ValueError`
so the HTTP layer can translate the whole family into a 400 response.
"""


class DocumentParseError(ValueError):
    """A document's front matter could not be parsed."""


class SlugValidationError(ValueError):
    """An externally supplied slug is malformed or unsafe."""


class QueryTooLargeError(ValueError):
    """A search query exceeds the maximum accepted length."""
