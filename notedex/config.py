"""Runtime settings, read once from the environment at import time."""

import os
import re
from pathlib import Path

_BASE_PATH_RE = re.compile(r"[A-Za-z0-9/_-]+")


def validate_base_path(base_path: str) -> str:
    """Return *base_path* without leading/trailing slashes.

    The base path is interpolated into every generated link, so only
    alphanumerics, hyphens, underscores and forward slashes are accepted.

    Raises:
        ValueError: if *base_path* contains any other character.
    """
    if not base_path:
        return ""
    if not _BASE_PATH_RE.fullmatch(base_path):
        raise ValueError("Invalid BASE_PATH: contains unsafe characters")
    return base_path.strip("/")


def _env_flag(name: str, default: bool) -> bool:
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() not in {"0", "false", "no", "off", ""}


CONTENT_DIR = Path(os.environ.get("NOTEDEX_CONTENT_DIR", "content")).resolve()
OUTPUT_DIR = Path(os.environ.get("NOTEDEX_OUTPUT_DIR", "docs")).resolve()
PUBLIC_DIR = Path(os.environ.get("NOTEDEX_PUBLIC_DIR", "public")).resolve()

BASE_PATH = validate_base_path(os.environ.get("BASE_PATH", ""))

HOST = os.environ.get("HOST", "127.0.0.1")
PORT = int(os.environ.get("PORT", "3000"))

# Watch the content directory for changes while serving
WATCH = _env_flag("NOTEDEX_WATCH", True)

RATE_LIMIT = os.environ.get("NOTEDEX_RATE_LIMIT", "120/minute")
LOG_LEVEL = os.environ.get("NOTEDEX_LOG_LEVEL", "INFO")
SITE_TITLE = os.environ.get("NOTEDEX_SITE_TITLE", "My Notes")
