"""Tests for soft-404 detection."""

import pytest

from doclinks.classifier import body_text, is_not_found, match_not_found_text
from doclinks.constants import NOT_FOUND_PATTERNS


class TestMatchNotFoundText:
    """Test cases for phrase matching on plain text."""

    @pytest.mark.parametrize("text", [
        "Page Not Found",
        "Error 404",
        "This page does not exist.",
        "The resource cannot be found",
        "We could not find what you were looking for.",
    ])
    def test_matches_not_found_phrases(self, text):
        """Test that typical not-found wording is detected."""
        assert match_not_found_text(text) is not None

    def test_first_pattern_wins(self):
        """Test that patterns are tried in their fixed order."""
        assert match_not_found_text("404 - Page not found") == "page not found"

    def test_case_insensitive(self):
        """Test matching ignores case."""
        assert match_not_found_text("NOT FOUND") == "not found"

    def test_clean_text(self):
        """Test that ordinary documentation text passes."""
        assert match_not_found_text("Getting started with the API") is None

    def test_empty_text(self):
        """Test empty or missing text is never not-found."""
        assert match_not_found_text("") is None
        assert match_not_found_text(None) is None

    def test_generic_error_is_accepted_false_positive(self):
        """Test a page about error handling is flagged (coarse on purpose)."""
        assert match_not_found_text("Error handling in plugins") == "error"

    def test_docusaurus_phrases_present(self):
        """Test the generator-specific phrases are part of the list."""
        assert "this page was not found" in NOT_FOUND_PATTERNS
        assert "broken link" in NOT_FOUND_PATTERNS


class TestIsNotFound:
    """Test cases for HTML classification."""

    def test_body_text_only(self):
        """Test that only the body is inspected, not the title."""
        html = "<html><head><title>404</title></head><body><p>Install guide</p></body></html>"
        assert is_not_found(html) is False

    def test_soft_404_body(self):
        """Test a 200 page whose body says page not found."""
        html = "<html><body><h1>Page Not Found</h1></body></html>"
        assert is_not_found(html) is True

    def test_fragment_without_body(self):
        """Test markup without a body element is still inspected."""
        assert is_not_found("<div>Sorry, that does not exist</div>") is True

    def test_empty_content(self):
        """Test empty content yields False."""
        assert is_not_found("") is False
        assert is_not_found(None) is False

    def test_body_text_strips_markup(self):
        """Test body text extraction drops tags."""
        assert body_text("<body><b>Hello</b> <i>docs</i></body>") == "Hello docs"
