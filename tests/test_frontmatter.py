"""Tests for frontmatter handling."""

import pytest

from vaultkeeper.indexer.frontmatter import extract, has_frontmatter, regenerate, strip
from vaultkeeper.storage import IndexSettings


@pytest.fixture
def note_content() -> str:
    return "---\ntitle: Home\n---\n# Home\n\nSome text."


class TestDetection:
    """Tests for has_frontmatter, extract and strip."""

    def test_has_frontmatter(self, note_content: str):
        assert has_frontmatter(note_content, "---") is True

    def test_single_separator_is_not_frontmatter(self):
        assert has_frontmatter("Intro\n---\nMore", "---") is False

    def test_empty_separator(self, note_content: str):
        assert has_frontmatter(note_content, "") is False

    def test_extract(self, note_content: str):
        assert extract(note_content, "---") == "---\ntitle: Home\n---"

    def test_extract_without_frontmatter(self):
        assert extract("# Just a note", "---") == ""

    def test_strip(self, note_content: str):
        assert strip(note_content, "---") == "\n# Home\n\nSome text."

    def test_strip_without_frontmatter(self):
        assert strip("# Just a note", "---") == "# Just a note"

    def test_extract_then_strip_rebuilds_content(self, note_content: str):
        assert extract(note_content, "---") + strip(note_content, "---") == note_content

    def test_metadata_moves_to_front(self):
        content = "Preface\n+++\nkey: value\n+++\nBody"
        rebuilt = extract(content, "+++") + strip(content, "+++")
        assert rebuilt == "+++\nkey: value\n+++Preface\n\nBody"

    def test_custom_separator(self):
        content = "%%%\nkey: value\n%%%\nBody"
        assert extract(content, "%%%") == "%%%\nkey: value\n%%%"
        assert strip(content, "%%%") == "\nBody"


class TestRegenerate:
    """Tests for regenerate."""

    def test_no_frontmatter_yields_nothing(self):
        assert regenerate(IndexSettings(), "# No metadata here") == ""

    def test_adds_tag_line(self, note_content: str):
        result = regenerate(IndexSettings(), note_content)
        assert result == "---\ntitle: Home\ntags: [MOC]\n---"

    def test_tag_already_present(self):
        content = "---\ntags: [MOC]\n---\nBody"
        assert regenerate(IndexSettings(), content) == "---\ntags: [MOC]\n---"

    def test_tag_present_in_yaml_list(self):
        content = "---\ntags: [project, MOC]\n---\n"
        assert regenerate(IndexSettings(), content) == "---\ntags: [project, MOC]\n---"

    def test_appends_to_inline_tags(self):
        content = "---\ntags: project\n---\n"
        assert regenerate(IndexSettings(), content) == "---\ntags: [project], [MOC]\n---"

    def test_without_square_brackets(self):
        settings = IndexSettings(add_square_brackets=False)
        content = "---\ntags: project\n---\n"
        assert regenerate(settings, content) == "---\ntags: project, MOC\n---"

    def test_custom_label_and_separator(self):
        settings = IndexSettings(
            index_tag_label="categories",
            index_tag_value="index",
            index_tag_separator=" | ",
            add_square_brackets=False,
        )
        content = "---\ncategories: notes | work\n---\n"
        assert regenerate(settings, content) == "---\ncategories: notes | work | index\n---"

    def test_appends_to_block_list(self):
        content = "---\ntags:\n  - project\ntitle: Home\n---\n"
        result = regenerate(IndexSettings(), content)
        assert result == "---\ntags:\n  - project\n  - MOC\ntitle: Home\n---"

    def test_disabled_tag_passes_metadata_through(self, note_content: str):
        settings = IndexSettings(index_tag_enabled=False)
        assert regenerate(settings, note_content) == "---\ntitle: Home\n---"

    def test_empty_frontmatter(self):
        assert regenerate(IndexSettings(), "---\n---\n") == "---\ntags: [MOC]\n---"

    def test_space_separated_tags(self):
        settings = IndexSettings(index_tag_separator=" ", add_square_brackets=False)
        assert regenerate(settings, "---\ntags: a\n---\nbody") == "---\ntags: a MOC\n---"

    def test_space_separated_bracketed_tags(self):
        settings = IndexSettings(index_tag_separator=" ")
        assert regenerate(settings, "---\ntags: a\n---\nbody") == "---\ntags: [a] [MOC]\n---"

    def test_space_separated_tag_already_present(self):
        settings = IndexSettings(index_tag_separator=" ")
        assert regenerate(settings, "---\ntags: [a] [MOC]\n---\n") == "---\ntags: [a] [MOC]\n---"

    @pytest.mark.parametrize(
        "content",
        [
            "---\ntitle: Home\n---\nBody",
            "---\ntags: project\n---\n",
            "---\ntags:\n  - project\n---\n",
            "---\ntags: [a], [b]\n---\n",
            "---\ntags: a b\n---\n",
            "---\ntags: [a] [b]\n---\n",
            "No frontmatter at all",
        ],
    )
    @pytest.mark.parametrize(
        "settings",
        [
            IndexSettings(),
            IndexSettings(index_tag_separator=" "),
            IndexSettings(index_tag_separator=" ", add_square_brackets=False),
            IndexSettings(index_tag_separator=" | ", add_square_brackets=False),
        ],
        ids=["default", "space", "space-plain", "pipe-plain"],
    )
    def test_idempotent(self, content: str, settings: IndexSettings):
        once = regenerate(settings, content)
        assert regenerate(settings, once) == once
