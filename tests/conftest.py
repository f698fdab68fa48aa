from pathlib import Path

import pytest


def _write(root: Path, relative_path: str, text: str) -> Path:
    path = root / relative_path
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


@pytest.fixture
def write_doc():
    """Return a helper that writes a document below a root directory."""
    return _write


@pytest.fixture
def content_dir(tmp_path: Path) -> Path:
    """Content root with ``a.md`` (titled "Alpha") and ``folder/b.md`` (untitled)."""
    root = tmp_path / "content"
    _write(root, "a.md", "---\ntitle: Alpha\ndescription: First letter\n---\nThe first document.\n")
    _write(root, "folder/b.md", "Second document body.\n")
    return root
