"""Batch export: render every document plus the sidebar tree to static HTML."""

import asyncio
import logging
import shutil
from pathlib import Path
from typing import NamedTuple, Optional

from notedex.services.index import ContentIndex
from notedex.services.parser import DocumentParser
from notedex.services.renderer import DEFAULT_SITE_TITLE, render_page, site_prefix

logger = logging.getLogger(__name__)


class ExportResult(NamedTuple):
    pages: int
    output_dir: Path


def _output_path(output_dir: Path, slug: str) -> Path:
    """Return the HTML file for *slug*, refusing paths that leave *output_dir*."""
    target = (output_dir / f"{slug}.html").resolve()
    if not target.is_relative_to(output_dir.resolve()):
        raise ValueError(f"Slug {slug!r} resolves outside the output directory.")
    return target


def _write(path: Path, text: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")


async def export_site(
    content_dir: Path,
    output_dir: Path,
    public_dir: Optional[Path] = None,
    *,
    base_path: str = "",
    site_title: str = DEFAULT_SITE_TITLE,
    parser: Optional[DocumentParser] = None,
) -> ExportResult:
    """Render the content directory into *output_dir*.

    The output directory is wiped first. It receives ``index.html``, one
    ``<slug>.html`` per document, ``404.html``, an empty ``.nojekyll`` and a
    copy of *public_dir* under ``public/`` when that directory exists.

    Raises:
        OSError: if the content directory cannot be read or the output
            cannot be written.
    """
    logger.info("Starting build process...")
    output_dir = Path(output_dir)

    if output_dir.exists():
        await asyncio.to_thread(shutil.rmtree, output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    if public_dir is not None and Path(public_dir).is_dir():
        await asyncio.to_thread(shutil.copytree, public_dir, output_dir / "public")
        logger.info("Copied public assets")
    else:
        logger.info("No public directory to copy")

    index = ContentIndex(content_dir, parser=parser)
    await index.reload()
    tree = index.get_tree()

    prefix = site_prefix(base_path)
    options = {"page_prefix": prefix, "page_suffix": ".html", "asset_prefix": prefix, "site_title": site_title}

    _write(output_dir / "index.html", render_page(tree, **options))
    logger.info("Generated index.html")

    pages = index.store.snapshot()
    for page in pages:
        _write(_output_path(output_dir, page.slug), render_page(tree, page, **options))
        logger.info("Generated %s.html", page.slug)

    _write(output_dir / "404.html", render_page(tree, **options))
    logger.info("Generated 404.html")

    # Keep GitHub Pages from running the output through Jekyll
    (output_dir / ".nojekyll").write_text("", encoding="utf-8")

    logger.info("Build complete! Generated %d pages in %s", len(pages), output_dir)
    return ExportResult(pages=len(pages), output_dir=output_dir)
