"""Tests for notedex.services.slugs."""

import pytest

from notedex.errors import SlugValidationError
from notedex.services.slugs import (
    MAX_SLUG_LENGTH,
    is_document_path,
    path_to_slug,
    slug_to_path,
    validate_slug,
)


class TestPathToSlug:
    def test_strips_extension(self):
        assert path_to_slug("a.md") == "a"

    def test_nested_path(self):
        assert path_to_slug("folder/b.md") == "folder/b"

    def test_backslashes_become_forward_slashes(self):
        assert path_to_slug("folder\\sub\\c.md") == "folder/sub/c"

    def test_separator_styles_collide(self):
        assert path_to_slug("x\\y.md") == path_to_slug("x/y.md")

    def test_case_and_whitespace_preserved(self):
        assert path_to_slug("My Notes/Read Me.md") == "My Notes/Read Me"

    def test_only_trailing_extension_removed(self):
        assert path_to_slug("v1.md.backup/notes.md") == "v1.md.backup/notes"


class TestSlugToPath:
    @pytest.mark.parametrize("path", ["a.md", "folder/b.md", "deep/er/still/c.md"])
    def test_round_trip(self, path):
        assert slug_to_path(path_to_slug(path)) == path

    def test_round_trip_normalises_separators(self):
        assert slug_to_path(path_to_slug("folder\\b.md")) == "folder/b.md"


class TestIsDocumentPath:
    def test_markdown_file(self):
        assert is_document_path("notes/today.md")

    def test_other_files(self):
        assert not is_document_path("image.png")
        assert not is_document_path("notes.md.swp")


class TestValidateSlug:
    @pytest.mark.parametrize("slug", ["a", "folder/b", "2024_notes/day-01", "A/B/C"])
    def test_accepts_safe_slugs(self, slug):
        assert validate_slug(slug) == slug

    @pytest.mark.parametrize(
        "slug",
        ["", "../etc/passwd", "folder/../a", "a.b", "a b", "a%2Fb", "/a", "a/", "a//b", "a\\b", "ä", "a\n", "folder/b\n"],
    )
    def test_rejects_unsafe_slugs(self, slug):
        with pytest.raises(SlugValidationError):
            validate_slug(slug)

    def test_rejects_overlong_slug(self):
        with pytest.raises(SlugValidationError):
            validate_slug("a" * (MAX_SLUG_LENGTH + 1))

    def test_is_a_value_error(self):
        with pytest.raises(ValueError):
            validate_slug("..")
