"""
Tests for query scoring and best-match selection.
"""

import pytest

from changekb.knowledge_base import build_knowledge_base
from changekb.knowledge_base.models import KnowledgeEntry
from changekb.knowledge_base.patterns import build_patterns
from changekb.knowledge_base.retriever import best_match, score


def _entry(label, body="body"):
    return KnowledgeEntry(label=label, body=body, patterns=tuple(build_patterns(label)))


class TestScore:
    """Whole-word coverage of patterns"""

    def test_full_coverage(self):
        assert score("what is lead time", ["What is lead time?"]) == 1.0

    def test_partial_coverage(self):
        assert score("tell me about the CAB", ["What is a CAB?"]) == pytest.approx(0.25)

    def test_best_pattern_wins(self):
        patterns = ["What is the rollback procedure?", "rollback", "procedure"]
        assert score("rollback", patterns) == 1.0

    def test_whole_word_only(self):
        """'cat' must not match inside 'category'"""
        assert score("show me the category list", ["cat"]) == 0.0
        assert score("my cat", ["cat"]) == 1.0

    def test_empty_query_scores_zero(self):
        assert score("", ["What is a CAB?", "approval", "window"]) == 0.0
        assert score("?!", ["approval"]) == 0.0

    def test_pattern_without_words_scores_zero(self):
        assert score("anything", ["???", ""]) == 0.0

    def test_query_is_normalized(self):
        assert score("WHAT'S THE   Lead-Time?!", ["lead time"]) == 1.0

    @pytest.mark.parametrize("query", ["", "cab", "lead time window", "a a a a", "zzz"])
    def test_score_is_bounded(self, query):
        patterns = ["What is a CAB?", "lead", "time", "a a"]
        assert 0.0 <= score(query, patterns) <= 1.0


class TestBestMatch:
    """Selection over a knowledge base"""

    @pytest.fixture
    def kb(self, cab_document):
        return build_knowledge_base(cab_document)

    def test_exact_question_matches_first_entry(self, kb):
        result = best_match("What is a CAB?", kb)
        assert result.matched
        assert result.entry_index == 0
        assert result.score == 1.0
        assert kb[result.entry_index].body == "A Change Advisory Board reviews RFCs."

    def test_second_entry_beats_partial_first(self, kb):
        result = best_match("what is lead time", kb)
        assert result.entry_index == 1

    def test_paraphrase_below_default_threshold(self, kb):
        """Only 'cab' of 'what is a cab' is present: coverage 0.25"""
        result = best_match("tell me about the CAB", kb)
        assert result.entry_index is None
        assert result.score == pytest.approx(0.25)

    def test_paraphrase_with_lower_threshold(self, kb):
        result = best_match("tell me about the CAB", kb, threshold=0.2)
        assert result.entry_index == 0
        assert result.score > 0.2

    def test_unrelated_query_is_not_matched(self, kb):
        result = best_match("banana spaceship", kb)
        assert result.entry_index is None
        assert result.score <= 0.35

    def test_score_equal_to_threshold_is_not_matched(self):
        entries = [KnowledgeEntry(label="alpha beta", body="body", patterns=("alpha beta",))]
        assert best_match("alpha", entries, threshold=0.5).entry_index is None
        assert best_match("alpha", entries, threshold=0.49).entry_index == 0

    def test_ties_keep_lowest_index(self):
        entries = [_entry("reset password", "first"), _entry("reset password", "second")]
        assert best_match("how to reset password", entries).entry_index == 0

    def test_empty_knowledge_base(self):
        result = best_match("anything at all", [])
        assert result.entry_index is None
        assert result.score == 0.0

    def test_empty_query(self, kb):
        result = best_match("", kb)
        assert result.entry_index is None
        assert result.score == 0.0

    def test_matching_is_idempotent(self, kb):
        first = best_match("what is lead time", kb)
        second = best_match("what is lead time", kb)
        assert first == second
