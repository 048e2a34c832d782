"""
Unit Tests for the Entry Model.

Tests tag normalization and the tag list property without a database.
"""

from modules.backend.models.entry import Entry, normalize_tags


class TestNormalizeTags:
    """Tests for tag normalization."""

    def test_trims_and_lowercases(self):
        assert normalize_tags(["React", " Tutorial "]) == ["react", "tutorial"]

    def test_drops_blank_tags(self):
        assert normalize_tags(["", "  ", "go"]) == ["go"]

    def test_none_is_empty(self):
        assert normalize_tags(None) == []

    def test_order_and_duplicates_are_preserved(self):
        assert normalize_tags(["b", "A", "a"]) == ["b", "a", "a"]


class TestEntryTags:
    """Tests for the tags property."""

    def test_setter_builds_positioned_tag_rows(self):
        entry = Entry(title="T", content="C", author_id="u1")
        entry.tags = ["React", " Hooks "]

        assert entry.tags == ["react", "hooks"]
        assert [link.position for link in entry.tag_links] == [0, 1]

    def test_constructor_accepts_tags(self):
        entry = Entry(title="T", content="C", author_id="u1", tags=["X"])
        assert entry.tags == ["x"]

    def test_setting_none_clears_tags(self):
        entry = Entry(title="T", content="C", author_id="u1", tags=["x"])
        entry.tags = None
        assert entry.tags == []
