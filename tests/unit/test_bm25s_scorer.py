"""
Unit tests for BM25S scoring.
"""

import math

import pytest
from src.bm25s import BM25S, BM25SConfig
from src.bm25s.config import LONG_B, LONG_K1, SHORT_B, SHORT_K1
from src.bm25s.exceptions import ConfigurationError, DocumentIndexError


class TestConstruction:
    """Test engine initialization"""

    def test_english_defaults(self, english_docs):
        engine = BM25S(english_docs, "en")
        assert engine.language == "en"
        assert engine.k1 == SHORT_K1
        assert engine.b == SHORT_B
        assert engine.use_iwf is False
        assert len(engine) == 2

    def test_russian_pinned_parameters(self, russian_docs):
        engine = BM25S(russian_docs[:2], "ru", k1=1.5, b=0.5, use_iwf=True)
        assert engine.language == "ru"
        assert engine.k1 == 1.5
        assert engine.b == 0.5
        assert engine.use_iwf is True

    def test_unknown_language_falls_back(self, english_docs):
        engine = BM25S(english_docs, "tlh")
        assert engine.language == "auto"
        assert engine.score(1, "fox") > 0

    def test_long_collection_auto_tuned(self):
        docs = [" ".join(f"word{i}" for i in range(250)), "short text here"]
        engine = BM25S(docs)
        assert engine.avg_doc_length > 100
        assert engine.k1 == LONG_K1
        assert engine.b == LONG_B

    def test_average_of_exactly_100_keeps_short_defaults(self):
        docs = [" ".join(f"word{i}" for i in range(100))]
        engine = BM25S(docs)
        assert engine.avg_doc_length == 100
        assert engine.k1 == SHORT_K1
        assert engine.b == SHORT_B

    def test_average_just_above_100_uses_long_defaults(self):
        docs = [" ".join(f"word{i}" for i in range(101)), " ".join(f"term{i}" for i in range(100))]
        engine = BM25S(docs)
        assert engine.avg_doc_length == 100.5
        assert engine.k1 == LONG_K1
        assert engine.b == LONG_B

    def test_long_collection_keeps_pinned_values(self):
        docs = [" ".join(f"word{i}" for i in range(250))]
        engine = BM25S(docs, k1=1.0)
        assert engine.k1 == 1.0
        assert engine.b == LONG_B

    def test_invalid_parameters(self, english_docs):
        with pytest.raises(ConfigurationError):
            BM25S(english_docs, b=1.5)
        with pytest.raises(ConfigurationError):
            BM25S(english_docs, tokenizer="split")

    def test_from_config(self, english_docs):
        config = BM25SConfig(k1=2.0, use_iwf=True, language="en")
        engine = BM25S.from_config(english_docs, config)
        assert engine.k1 == 2.0
        assert engine.b == SHORT_B
        assert engine.use_iwf is True
        assert engine.language == "en"

    def test_documents_not_mutated(self, english_docs):
        original = list(english_docs)
        engine = BM25S(english_docs)
        engine.search("fox")
        assert english_docs == original
        assert engine.documents == tuple(original)


class TestScore:
    """Test per-document scoring"""

    def test_shorter_document_scores_higher(self, english_docs):
        engine = BM25S(english_docs, "en")
        score_doc0 = engine.score(0, "fox")
        score_doc1 = engine.score(1, "fox")
        assert score_doc0 > 0
        assert score_doc1 > 0
        assert score_doc1 >= score_doc0

    def test_russian_scores_positive(self, russian_docs):
        engine = BM25S(russian_docs[:2], "ru")
        assert engine.score(0, "лисица") > 0
        assert engine.score(1, "лисица") > 0

    def test_query_is_stemmed(self, english_docs):
        engine = BM25S(english_docs)
        assert engine.score(1, "FOXES!") == engine.score(1, "fox")

    def test_no_match_is_zero(self, english_docs):
        engine = BM25S(english_docs)
        assert engine.score(0, "elephant") == 0.0
        assert engine.score(0, "") == 0.0

    def test_exact_formula(self):
        docs = ["fox dog", "cat cat cat bird"]
        engine = BM25S(docs, tokenizer=str.split)
        # avgdl = 3, N = 2, df(fox) = 1, tf = 1, dl = 2
        k1, b = SHORT_K1, SHORT_B
        weight = math.log(3 / 1.5) + 1
        expected = weight * (1 * (k1 + 1)) / (1 + k1 * (1 - b + b * 2 / 3))
        assert engine.score(0, "fox") == pytest.approx(expected)

    def test_repeated_query_terms_accumulate(self):
        engine = BM25S(["fox dog", "cat"], tokenizer=str.split)
        assert engine.score(0, "fox fox") == pytest.approx(2 * engine.score(0, "fox"))

    def test_iwf_formula(self):
        docs = ["fox dog", "cat cat cat bird"]
        engine = BM25S(docs, tokenizer=str.split, use_iwf=True)
        k1, b = SHORT_K1, SHORT_B
        weight = math.log(6 / 1)
        expected = weight * (k1 + 1) / (1 + k1 * (1 - b + b * 2 / 3))
        assert engine.score(0, "fox") == pytest.approx(expected)

    def test_long_document_penalty(self):
        # avgdl = 12 / 4 = 3, document 0 has 9 terms > 2 * avgdl
        docs = ["fox " + " ".join(["pad"] * 8), "cat", "cat", "cat"]
        engine = BM25S(docs, tokenizer=str.split)
        avgdl, dl = 3.0, 9
        k1, b = engine.k1, engine.b
        weight = engine.term_weight("fox")
        base = weight * (k1 + 1) / (1 + k1 * (1 - b + b * dl / avgdl))
        assert engine.score(0, "fox") == pytest.approx(base * avgdl / dl)

    def test_no_penalty_at_exactly_twice_average(self):
        docs = ["fox pad pad pad", "cat", "cat"]  # avgdl = 2, dl = 4 == 2 * avgdl
        engine = BM25S(docs, tokenizer=str.split)
        k1, b = engine.k1, engine.b
        weight = engine.term_weight("fox")
        expected = weight * (k1 + 1) / (1 + k1 * (1 - b + b * 4 / 2))
        assert engine.score(0, "fox") == pytest.approx(expected)

    def test_monotonic_in_term_frequency(self):
        """Equal-length documents: more occurrences never score lower"""
        docs = ["fox fox fox pad", "fox pad pad pad", "cat dog bird fish"]
        engine = BM25S(docs, tokenizer=str.split)
        assert engine.score(0, "fox") >= engine.score(1, "fox") > 0

    def test_rarer_term_rewarded(self):
        """IDF: a term in fewer documents weighs more per occurrence"""
        docs = ["rare common", "common pad", "common pad"]
        engine = BM25S(docs, tokenizer=str.split)
        assert engine.term_weight("rare") > engine.term_weight("common")
        assert engine.score(0, "rare") > engine.score(0, "common")

    def test_custom_tokenizer_used_for_queries(self):
        engine = BM25S(["Foxes Run"], tokenizer=str.split)
        assert engine.score(0, "Foxes") > 0
        assert engine.score(0, "foxes") == 0.0
        assert engine.tokenize("Foxes Run") == ["Foxes", "Run"]

    def test_out_of_range_index(self, english_docs):
        engine = BM25S(english_docs)
        with pytest.raises(DocumentIndexError):
            engine.score(2, "fox")
        with pytest.raises(DocumentIndexError):
            engine.score(-1, "fox")

    def test_latin_cyrillic_homoglyph_does_not_match(self):
        """'яb' (Latin b) and 'яб' (Cyrillic б) are different terms"""
        engine = BM25S(["яб", "other words"])
        assert engine.score(0, "яb") == 0.0
        assert engine.score(0, "яб") > 0

    def test_bool_index_rejected(self, english_docs):
        engine = BM25S(english_docs)
        with pytest.raises(DocumentIndexError):
            engine.score(True, "fox")
        with pytest.raises(DocumentIndexError):
            engine.score(False, "fox")

    def test_non_integer_index_rejected(self, english_docs):
        engine = BM25S(english_docs)
        with pytest.raises(DocumentIndexError):
            engine.score(1.0, "fox")
        with pytest.raises(DocumentIndexError):
            engine.score("1", "fox")

    def test_integer_like_index_accepted(self, english_docs):
        """Objects implementing __index__ (e.g. numpy integers) are valid positions"""
        class Position:
            def __init__(self, value):
                self.value = value

            def __index__(self):
                return self.value

        engine = BM25S(english_docs)
        assert engine.score(Position(1), "fox") == engine.score(1, "fox")
        with pytest.raises(DocumentIndexError):
            engine.score(Position(5), "fox")

    def test_out_of_range_is_index_error(self):
        engine = BM25S([])
        with pytest.raises(IndexError, match="out of range"):
            engine.score(0, "fox")


class TestEmptyCollections:
    """Test the avgdl = 0 guard"""

    def test_empty_collection(self):
        engine = BM25S([], "en")
        assert engine.avg_doc_length == 0
        assert len(engine) == 0

    def test_only_empty_documents(self):
        engine = BM25S(["", ""], "en")
        assert engine.avg_doc_length == 0
        assert engine.doc_lengths == (0, 0)

    def test_only_empty_documents_score_zero(self):
        engine = BM25S(["", "  ", ".,!"], "en")
        for i in range(3):
            score = engine.score(i, "fox")
            assert score == 0.0
            assert math.isfinite(score)

    def test_empty_documents_score_zero_with_custom_tokenizer(self):
        engine = BM25S(["", ""], tokenizer=lambda text: [])
        assert engine.score(0, "anything") == 0.0

    def test_empty_document_in_normal_collection(self):
        engine = BM25S(["The quick brown fox jumps", "The fox fled from danger", ""], "en")
        assert engine.score(2, "fox") == 0.0
        assert engine.avg_doc_length == pytest.approx(10 / 3)
        assert engine.term_doc_freq["fox"] == 2
