import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from notedex import config
from notedex.log_config import configure_logging
from notedex.models.response import HealthResponse
from notedex.routers.pages import limiter, router as pages_router
from notedex.routers.site import router as site_router
from notedex.services.index import ContentIndex
from notedex.services.watcher import ContentWatcher

configure_logging(config.LOG_LEVEL)

logger = logging.getLogger(__name__)

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "strict-origin-when-cross-origin",
    "Content-Security-Policy": (
        "default-src 'self'; img-src 'self' data: https:; "
        "style-src 'self' 'unsafe-inline'; script-src 'self'; "
        "object-src 'none'; frame-ancestors 'none'"
    ),
}


def create_app(
    content_dir: Optional[Path] = None,
    *,
    watch: Optional[bool] = None,
    public_dir: Optional[Path] = None,
    site_title: Optional[str] = None,
) -> FastAPI:
    """Build the live service for *content_dir*.

    The content index is loaded when the application starts and, when
    *watch* is enabled, kept current by a filesystem watcher until shutdown.
    """
    content_dir = Path(content_dir) if content_dir is not None else config.CONTENT_DIR
    watch = config.WATCH if watch is None else watch
    public_dir = Path(public_dir) if public_dir is not None else config.PUBLIC_DIR

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        index = ContentIndex(content_dir)
        await index.start()
        app.state.index = index

        watcher = ContentWatcher(index) if watch else None
        if watcher is not None:
            watcher.start()
        try:
            yield
        finally:
            if watcher is not None:
                watcher.stop()
            await index.shutdown()

    app = FastAPI(
        title="notedex – Markdown Notes Service",
        description="Indexes a directory of Markdown notes and serves its tree, pages and search.",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.site_title = site_title or config.SITE_TITLE

    # Rate-limiting state
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled exception for %s", request.url)
        return JSONResponse(status_code=500, content={"detail": "An unexpected error occurred."})

    @app.middleware("http")
    async def add_security_headers(request: Request, call_next):
        response = await call_next(request)
        for name, value in SECURITY_HEADERS.items():
            response.headers.setdefault(name, value)
        return response

    if public_dir.is_dir():
        app.mount("/public", StaticFiles(directory=public_dir), name="public")

    app.include_router(pages_router)
    app.include_router(site_router)

    @app.get("/health", response_model=HealthResponse, summary="Health check")
    async def health(request: Request) -> HealthResponse:
        return HealthResponse(status="ok", pages=request.app.state.index.page_count)

    return app


app = create_app()
