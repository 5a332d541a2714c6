"""
Tests for text normalisation and tokenisation.
"""

from changekb.utils.text import normalize, tokenize


class TestNormalize:
    """Lowercasing, punctuation stripping and whitespace collapsing"""

    def test_lowercases_and_strips_punctuation(self):
        assert normalize("  Hello, World!! ") == "hello world"

    def test_collapses_whitespace(self):
        assert normalize("a \t\n\n  b") == "a b"

    def test_underscores_and_dashes_are_separators(self):
        assert normalize("Change-Advisory_Board") == "change advisory board"

    def test_digits_are_kept(self):
        assert normalize("RFC #42 v2.0") == "rfc 42 v2 0"

    def test_non_ascii_is_treated_as_separator(self):
        assert normalize("café menu") == "caf menu"

    def test_empty_and_punctuation_only(self):
        assert normalize("") == ""
        assert normalize("?!...") == ""


class TestTokenize:
    """Split of normalised text"""

    def test_splits_on_whitespace(self):
        assert tokenize("What is a CAB?") == ["what", "is", "a", "cab"]

    def test_no_empty_tokens(self):
        assert tokenize("  --  ") == []
