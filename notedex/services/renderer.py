"""HTML page rendering shared by the batch export and the live service."""

import datetime as dt
from pathlib import Path
from typing import List, Optional

from jinja2 import Environment, FileSystemLoader, select_autoescape
from markupsafe import Markup

from notedex.models.page import PageRecord
from notedex.models.tree import NavigationNode

DEFAULT_SITE_TITLE = "My Notes"
TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"

_env = Environment(
    loader=FileSystemLoader(str(TEMPLATES_DIR)),
    autoescape=select_autoescape(),
    trim_blocks=True,
    lstrip_blocks=True,
)


def _format_date(value) -> str:
    if isinstance(value, dt.datetime):
        value = value.date()
    if isinstance(value, dt.date):
        return f"{value:%B} {value.day}, {value:%Y}"
    return str(value)


_env.filters["format_date"] = _format_date


def site_prefix(base_path: str) -> str:
    """Return the root-relative prefix for a site served under *base_path*."""
    return f"/{base_path}/" if base_path else "/"


def render_page(
    tree: List[NavigationNode],
    page: Optional[PageRecord] = None,
    *,
    page_prefix: str = "/",
    page_suffix: str = ".html",
    asset_prefix: str = "/",
    site_title: str = DEFAULT_SITE_TITLE,
) -> str:
    """Render the full HTML document for *page*, or the welcome screen when None.

    Sidebar links are ``page_prefix + slug + page_suffix``; the stylesheet is
    loaded from ``asset_prefix + "public/style.css"``. The page body is
    inserted as-is because it was sanitized when the document was loaded.
    """
    template = _env.get_template("page.html")
    return template.render(
        tree=tree,
        page=page,
        body=Markup(page.body) if page is not None else None,
        page_prefix=page_prefix,
        page_suffix=page_suffix,
        asset_prefix=asset_prefix,
        site_title=site_title,
    )
