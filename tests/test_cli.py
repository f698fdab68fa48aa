"""Tests for the ``notedex`` command line."""

import locale
from unittest.mock import patch

import pytest

from notedex.cli import main


@pytest.fixture(autouse=True)
def setlocale():
    """Keep the process collation locale untouched while the CLI runs."""
    with patch("notedex.cli.locale.setlocale") as mock_setlocale:
        yield mock_setlocale


def test_build(content_dir, tmp_path):
    output = tmp_path / "site"
    code = main(["build", "--content", str(content_dir), "--output", str(output), "--public", str(tmp_path / "none")])

    assert code == 0
    assert (output / "index.html").is_file()
    assert (output / "folder" / "b.html").is_file()


def test_build_with_base_path(content_dir, tmp_path):
    output = tmp_path / "site"
    code = main(["build", "--content", str(content_dir), "--output", str(output), "--base-path", "/notes/"])

    assert code == 0
    assert 'href="/notes/a.html"' in (output / "index.html").read_text(encoding="utf-8")


def test_build_rejects_unsafe_base_path(content_dir, tmp_path):
    output = tmp_path / "site"
    code = main(["build", "--content", str(content_dir), "--output", str(output), "--base-path", "../evil"])

    assert code == 2
    assert not output.exists()


def test_build_reports_unreadable_content(tmp_path):
    content = tmp_path / "content"
    content.write_text("not a directory", encoding="utf-8")

    assert main(["build", "--content", str(content), "--output", str(tmp_path / "site")]) == 1


def test_applies_user_collation(content_dir, tmp_path, setlocale):
    main(["build", "--content", str(content_dir), "--output", str(tmp_path / "site")])
    setlocale.assert_called_once_with(locale.LC_COLLATE, "")


def test_unknown_locale_still_builds(content_dir, tmp_path, setlocale):
    setlocale.side_effect = locale.Error("unsupported locale setting")
    assert main(["build", "--content", str(content_dir), "--output", str(tmp_path / "site")]) == 0
