"""Tests for notedex.config.validate_base_path."""

import pytest

from notedex.config import validate_base_path


class TestValidateBasePath:
    def test_empty_is_root(self):
        assert validate_base_path("") == ""

    def test_strips_slashes(self):
        assert validate_base_path("/my-notes/") == "my-notes"

    def test_nested_path_kept(self):
        assert validate_base_path("org/repo_name") == "org/repo_name"

    @pytest.mark.parametrize("value", ["a b", "repo?x=1", "<script>", "../up", "a.b", "notes\n"])
    def test_rejects_unsafe_characters(self, value):
        with pytest.raises(ValueError):
            validate_base_path(value)
