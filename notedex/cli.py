"""Command line entry point: ``notedex build`` and ``notedex serve``."""

import argparse
import asyncio
import locale
import logging
import sys
from pathlib import Path
from typing import List, Optional

from notedex import config
from notedex.log_config import configure_logging

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="notedex", description="Markdown notes indexer and site builder.")
    parser.add_argument("--log-level", default=config.LOG_LEVEL, help="Logging level (default: %(default)s).")
    sub = parser.add_subparsers(dest="command", required=True)

    build = sub.add_parser("build", help="Render the content directory to static HTML.")
    build.add_argument("--content", type=Path, default=config.CONTENT_DIR, help="Content directory.")
    build.add_argument("--output", type=Path, default=config.OUTPUT_DIR, help="Output directory (wiped first).")
    build.add_argument("--public", type=Path, default=config.PUBLIC_DIR, help="Static assets copied to output/public.")
    build.add_argument("--base-path", default=config.BASE_PATH, help="Path prefix when hosted below the domain root.")
    build.add_argument("--title", default=config.SITE_TITLE, help="Site title shown in the sidebar.")

    serve = sub.add_parser("serve", help="Serve the content directory with live reload.")
    serve.add_argument("--content", type=Path, default=config.CONTENT_DIR, help="Content directory.")
    serve.add_argument("--public", type=Path, default=config.PUBLIC_DIR, help="Static assets served under /public.")
    serve.add_argument("--host", default=config.HOST)
    serve.add_argument("--port", type=int, default=config.PORT)
    serve.add_argument("--no-watch", action="store_true", help="Do not watch the content directory for changes.")
    serve.add_argument("--title", default=config.SITE_TITLE, help="Site title shown in the sidebar.")
    return parser


def _run_build(args: argparse.Namespace) -> int:
    from notedex.services.exporter import export_site

    try:
        base_path = config.validate_base_path(args.base_path)
    except ValueError as exc:
        logger.error("%s", exc)
        return 2

    try:
        asyncio.run(
            export_site(args.content, args.output, args.public, base_path=base_path, site_title=args.title)
        )
    except OSError as exc:
        logger.error("Build failed: %s", exc)
        return 1
    return 0


def _run_serve(args: argparse.Namespace) -> int:
    import uvicorn

    from notedex.main import create_app

    app = create_app(args.content, watch=not args.no_watch, public_dir=args.public, site_title=args.title)
    logger.info("Server running at http://%s:%d", args.host, args.port)
    uvicorn.run(app, host=args.host, port=args.port, log_config=None)
    return 0


def _configure_collation() -> None:
    # Tree order uses locale.strxfrm, which follows LC_COLLATE
    try:
        locale.setlocale(locale.LC_COLLATE, "")
    except locale.Error as exc:
        logger.warning("Falling back to code point ordering – %s", exc)


def main(argv: Optional[List[str]] = None) -> int:
    args = _build_parser().parse_args(argv)
    configure_logging(args.log_level)
    _configure_collation()
    if args.command == "build":
        return _run_build(args)
    return _run_serve(args)


if __name__ == "__main__":
    sys.exit(main())
