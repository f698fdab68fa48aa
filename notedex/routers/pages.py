import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from slowapi import Limiter
from slowapi.util import get_remote_address

from notedex.config import RATE_LIMIT
from notedex.errors import QueryTooLargeError, SlugValidationError
from notedex.models.response import PageResponse, ReloadResponse, SearchResult
from notedex.models.tree import NavigationNode
from notedex.routers.deps import get_index
from notedex.services.index import ContentIndex
from notedex.services.search import MAX_QUERY_LENGTH

logger = logging.getLogger(__name__)

limiter = Limiter(key_func=get_remote_address)
router = APIRouter(prefix="/api", tags=["Content"])


@router.get(
    "/tree",
    response_model=List[NavigationNode],
    response_model_exclude_none=True,
    summary="Navigation tree of the content directory",
)
@limiter.limit(RATE_LIMIT)
async def get_tree(request: Request, index: ContentIndex = Depends(get_index)) -> List[NavigationNode]:
    """Folders first, then files, each level sorted by name."""
    return index.get_tree()


@router.get("/page/{slug:path}", response_model=PageResponse, summary="Rendered page by slug")
@limiter.limit(RATE_LIMIT)
async def get_page(request: Request, slug: str, index: ContentIndex = Depends(get_index)) -> PageResponse:
    try:
        record = index.get_page(slug)
    except SlugValidationError as exc:
        logger.warning("Rejected slug %r – %s", slug, exc)
        raise HTTPException(status_code=400, detail=str(exc))

    if record is None:
        raise HTTPException(status_code=404, detail="Page not found")

    return PageResponse(
        slug=record.slug,
        title=record.title,
        content=record.body,
        metadata=record.metadata.as_dict(),
        tags=record.metadata.tags,
    )


@router.get(
    "/search",
    response_model=List[SearchResult],
    summary="Search page titles and bodies",
    description=(
        "Case-insensitive substring search over page titles and bodies. "
        "Returns at most 20 results; an empty query returns an empty list."
    ),
)
@limiter.limit(RATE_LIMIT)
async def search_pages(
    request: Request,
    q: Optional[str] = Query(default=None, description=f"Search text (max {MAX_QUERY_LENGTH} characters)."),
    index: ContentIndex = Depends(get_index),
) -> List[SearchResult]:
    try:
        return index.search(q)
    except QueryTooLargeError as exc:
        logger.warning("Rejected search query – %s", exc)
        raise HTTPException(status_code=400, detail=str(exc))


@router.post("/reload", response_model=ReloadResponse, summary="Re-index the content directory")
@limiter.limit("5/minute")
async def reload_index(request: Request, index: ContentIndex = Depends(get_index)) -> ReloadResponse:
    try:
        await index.reload()
    except OSError as exc:
        logger.error("Reload failed for %s: %s", index.content_dir, exc)
        raise HTTPException(status_code=503, detail="The content directory could not be read.")
    return ReloadResponse(pages=index.page_count)
