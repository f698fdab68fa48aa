"""Allow-list HTML sanitizer applied to every rendered document body."""

import re

from bs4 import BeautifulSoup, Comment

ALLOWED_TAGS = frozenset(
    {
        "p", "br", "strong", "em", "u", "s", "a", "ul", "ol", "li",
        "blockquote", "code", "pre",
        "h1", "h2", "h3", "h4", "h5", "h6",
        "img", "table", "thead", "tbody", "tr", "th", "td", "hr",
        "div", "span",
    }
)

ALLOWED_ATTRS = frozenset({"href", "src", "alt", "title", "class", "id"})

# Attributes holding a URI that is followed or loaded by the browser
_URI_ATTRS = frozenset({"href", "src"})

# Tags whose entire subtree is removed; any other disallowed tag is unwrapped
# so its text survives.
_REMOVE_TAGS = {
    "script",
    "style",
    "noscript",
    "iframe",
    "frame",
    "frameset",
    "object",
    "embed",
    "applet",
    "link",
    "meta",
    "base",
    "svg",
    "math",
    "canvas",
    "template",
    "form",
    "textarea",
    "select",
    "button",
}

_UNSAFE_SCHEME_RE = re.compile(r"^(javascript|vbscript|data):", re.IGNORECASE)

# Browsers ignore whitespace and control characters inside a URI scheme
_SCHEME_NOISE_RE = re.compile(r"[\x00-\x20]+")


def _is_unsafe_uri(value: str) -> bool:
    return bool(_UNSAFE_SCHEME_RE.match(_SCHEME_NOISE_RE.sub("", value)))


def sanitize(html: str) -> str:
    """Return *html* reduced to the allowed tags and attributes.

    Comments are dropped, script-like elements are removed together with
    their content, other disallowed elements are unwrapped, and ``href``/
    ``src`` values using a ``javascript:``, ``vbscript:`` or ``data:``
    scheme are stripped. ``data-*`` attributes never survive.
    """
    soup = BeautifulSoup(html, "lxml")

    for tag in soup.find_all(_REMOVE_TAGS):
        tag.decompose()

    for comment in soup.find_all(string=lambda text: isinstance(text, Comment)):
        comment.extract()

    body = soup.body
    if body is None:
        return ""

    for tag in body.find_all(True):
        if tag.name not in ALLOWED_TAGS:
            tag.unwrap()
            continue
        for attr in list(tag.attrs):
            if attr not in ALLOWED_ATTRS:
                del tag[attr]
            elif attr in _URI_ATTRS and _is_unsafe_uri(str(tag[attr])):
                del tag[attr]

    return "".join(str(child) for child in body.contents)
