"""Server-rendered HTML views of the live index."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import HTMLResponse

from notedex.config import SITE_TITLE
from notedex.errors import SlugValidationError
from notedex.routers.deps import get_index
from notedex.services.index import ContentIndex
from notedex.services.renderer import render_page

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Site"])

_VIEW_OPTIONS = {"page_prefix": "/page/", "page_suffix": "", "asset_prefix": "/"}


def _site_title(request: Request) -> str:
    return getattr(request.app.state, "site_title", SITE_TITLE)


@router.get("/", response_class=HTMLResponse, include_in_schema=False)
async def home(request: Request, index: ContentIndex = Depends(get_index)) -> HTMLResponse:
    html = render_page(index.get_tree(), site_title=_site_title(request), **_VIEW_OPTIONS)
    return HTMLResponse(html)


@router.get("/page/{slug:path}", response_class=HTMLResponse, include_in_schema=False)
async def view_page(request: Request, slug: str, index: ContentIndex = Depends(get_index)) -> HTMLResponse:
    try:
        record = index.get_page(slug)
    except SlugValidationError as exc:
        logger.warning("Rejected slug %r – %s", slug, exc)
        raise HTTPException(status_code=400, detail=str(exc))

    html = render_page(index.get_tree(), record, site_title=_site_title(request), **_VIEW_OPTIONS)
    return HTMLResponse(html, status_code=200 if record is not None else 404)
