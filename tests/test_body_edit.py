"""
Unit tests for applying text suggestions to HTML bodies.
"""
import pytest

from utils.body_edit import apply_edit, strip_tags


@pytest.mark.unit
class TestApplyEdit:
    """Test suite for apply_edit."""

    def test_exact_match(self) -> None:
        """Test a literal occurrence is replaced once."""
        body = "<p>Acme grows. Acme grows.</p>"
        assert apply_edit(body, "Acme grows.", "Acme expands.") == "<p>Acme expands. Acme grows.</p>"

    def test_tags_between_words(self) -> None:
        """Test words separated by inline tags still match."""
        body = "<p>We are <em>very</em> proud</p>"
        assert apply_edit(body, "are very proud", "are proud") == "<p>We are proud</p>"

    def test_case_insensitive(self) -> None:
        """Test the tag-aware pass ignores case."""
        body = "<p>Our partner ACME  robotics today</p>"
        assert apply_edit(body, "acme robotics", "Acme Robotics Inc.") == "<p>Our partner Acme Robotics Inc. today</p>"

    def test_whitespace_differences(self) -> None:
        """Test line breaks in the body match single spaces in the suggestion."""
        body = "<p>Acme\n   today announced</p>"
        assert apply_edit(body, "Acme today announced", "Acme announced") == "<p>Acme announced</p>"

    def test_across_paragraphs(self) -> None:
        """Test a sentence spanning a paragraph break is found."""
        body = "<p>First line.</p><p>Second line.</p>"
        assert apply_edit(body, "First line. Second line.", "Merged.") == "<p>Merged.</p>"

    def test_visible_text_fallback(self) -> None:
        """Test markup inside a word is matched through the tag-stripped text."""
        body = "<p>Acme Ro<b>bot</b>ics builds arms</p>"
        assert apply_edit(body, "Acme Robotics", "Acme AI") == "<p>Acme AI builds arms</p>"

    def test_not_found(self) -> None:
        """Test a missing phrase returns None."""
        assert apply_edit("<p>Hello world</p>", "goodbye", "farewell") is None

    def test_blank_original(self) -> None:
        """Test whitespace-only suggestions never match."""
        assert apply_edit("<p>Hello</p>", "   ", "x") is None
        assert apply_edit("<p>Hello world</p>", " ", "X") is None


@pytest.mark.unit
def test_strip_tags() -> None:
    """Test tags are removed and whitespace collapsed."""
    assert strip_tags("<p>Acme <b>today</b></p>\n<p>announced</p>") == "Acme today announced"
    assert strip_tags(None) == ""
