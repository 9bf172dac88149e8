"""
BM25S scorer - BM25 tuned for short texts.

BM25 (Best Match 25) is a probabilistic ranking function used for information retrieval.
This variant auto-tunes k1/b from the average document length and dampens very long
documents on top of the usual length normalization.

Formula:
    score(doc, query) = Σ weight(term) × (tf × (k1 + 1)) / (tf + k1 × (1 - b + b × dl/avgdl))

Where:
    tf = term frequency in document
    k1 = term frequency saturation parameter (auto: 1.2 short / 1.5 long)
    b = length normalization parameter (auto: 0.3 short / 0.75 long)
    dl = document length (number of terms)
    avgdl = average document length in the collection
    weight = IDF (default) or IWF, see weighting.py

Long documents (dl > 2 × avgdl):
    Each term contribution is additionally multiplied by min(1, avgdl / dl)

Empty collections (avgdl = 0):
    Every document is empty, nothing can match, all scores are 0.0
"""

import logging
import operator
from dataclasses import dataclass
from typing import List, Mapping, Optional, Sequence, Tuple

from .config import BM25SConfig, ResolvedParameters, resolve_parameters
from .exceptions import DocumentIndexError
from .index_builder import CollectionIndex, build_index
from .stemmer import normalize_language
from .tokenizer import Tokenizer, TokenizerLike, resolve_tokenizer
from .weighting import Weighting, term_weight

logger = logging.getLogger(__name__)

# Documents longer than this multiple of avgdl get the extra length penalty
LONG_DOC_FACTOR = 2.0


@dataclass(frozen=True)
class SearchResult:
    """Single ranked document"""
    doc_index: int  # Position in the indexed collection
    score: float    # Relevance score (> 0, higher = more relevant)
    doc: str        # Document text (for convenience)


class BM25S:
    """
    BM25 ranking over a fixed collection of short documents.

    The index is built once in the constructor; score() and search()
    only read it, so they are safe to call from several threads.
    """

    def __init__(
        self,
        documents: Sequence[str],
        language: str = "auto",
        *,
        k1: Optional[float] = None,
        b: Optional[float] = None,
        use_iwf: bool = False,
        tokenizer: Optional[TokenizerLike] = None,
    ):
        """
        Build the index and resolve parameters.

        Args:
            documents: Document texts, identified by position (0-based)

            language: Stemming hint for the default tokenizer
                "en" / "ru" / "auto" (unknown values fall back to "auto")
                Ignored when a custom tokenizer is supplied

            k1: Term frequency saturation parameter
                None = auto (1.2 for short texts, 1.5 if avgdl > 100)
                Any value pins k1 and disables auto-tuning for it

            b: Length normalization parameter (0.0 - 1.0)
                None = auto (0.3 for short texts, 0.75 if avgdl > 100)
                Any value pins b and disables auto-tuning for it

            use_iwf: Use Inverse Word Frequency instead of IDF

            tokenizer: Tokenizer instance or `text -> terms` function
                Replaces lowercasing, punctuation trimming and stemming
                for both documents and queries

        Raises:
            ConfigurationError: If k1, b or tokenizer are invalid
        """
        config = BM25SConfig(k1=k1, b=b, use_iwf=use_iwf, tokenizer=tokenizer, language=language)

        self._language = normalize_language(config.language)
        self._tokenizer: Tokenizer = resolve_tokenizer(config.tokenizer, self._language)
        self._weighting = Weighting.IWF if config.use_iwf else Weighting.IDF

        self._index: CollectionIndex = build_index(documents, self._tokenizer)
        self._params: ResolvedParameters = resolve_parameters(config, self._index.avg_doc_length)

        logger.info(
            f"BM25S ready: {len(self._index)} documents, avgdl={self._index.avg_doc_length:.2f}, "
            f"k1={self._params.k1}, b={self._params.b}, weighting={self._weighting.value}"
        )

    @classmethod
    def from_config(cls, documents: Sequence[str], config: BM25SConfig) -> "BM25S":
        """Create an engine from a prepared BM25SConfig (e.g. BM25SConfig.from_env())."""
        return cls(
            documents,
            config.language,
            k1=config.k1,
            b=config.b,
            use_iwf=config.use_iwf,
            tokenizer=config.tokenizer,
        )

    # Read-only views

    @property
    def documents(self) -> Tuple[str, ...]:
        return self._index.documents

    @property
    def index(self) -> CollectionIndex:
        return self._index

    @property
    def doc_lengths(self) -> Tuple[int, ...]:
        return self._index.doc_lengths

    @property
    def doc_term_freqs(self) -> Tuple[Mapping[str, int], ...]:
        return self._index.doc_term_freqs

    @property
    def term_doc_freq(self) -> Mapping[str, int]:
        return self._index.term_doc_freq

    @property
    def term_total_freq(self) -> Mapping[str, int]:
        return self._index.term_total_freq

    @property
    def total_terms(self) -> int:
        return self._index.total_terms

    @property
    def avg_doc_length(self) -> float:
        return self._index.avg_doc_length

    @property
    def parameters(self) -> ResolvedParameters:
        return self._params

    @property
    def k1(self) -> float:
        return self._params.k1

    @property
    def b(self) -> float:
        return self._params.b

    @property
    def use_iwf(self) -> bool:
        return self._weighting is Weighting.IWF

    @property
    def language(self) -> str:
        return self._language

    @property
    def tokenizer(self) -> Tokenizer:
        return self._tokenizer

    def __len__(self) -> int:
        return len(self._index)

    def __repr__(self) -> str:
        return (
            f"BM25S(documents={len(self)}, k1={self.k1}, b={self.b}, "
            f"weighting={self._weighting.value}, language={self._language!r})"
        )

    # Scoring

    def tokenize(self, text: str) -> List[str]:
        """Tokenize text exactly as documents were tokenized."""
        return self._tokenizer.tokenize(text)

    def term_weight(self, term: str) -> float:
        """IDF or IWF weight of an already tokenized term."""
        return term_weight(term, self._index, self._weighting)

    def score(self, doc_index: int, query: str) -> float:
        """
        Compute BM25S relevance of one document to a query.

        Args:
            doc_index: Position of the document in the collection
            query: Free-text query (tokenized like the documents)

        Returns:
            Non-negative score, 0.0 when no query term occurs in the document

        Raises:
            DocumentIndexError: If doc_index is outside [0, len(documents))

        Example:
            >>> engine = BM25S(["The quick brown fox jumps over the lazy dog",
            ...                 "A fox fled from danger"])
            >>> engine.score(1, "fox") >= engine.score(0, "fox") > 0
            True
        """
        if isinstance(doc_index, bool):
            raise DocumentIndexError(doc_index, len(self._index))
        try:
            position = operator.index(doc_index)
        except TypeError:
            raise DocumentIndexError(doc_index, len(self._index))
        if not 0 <= position < len(self._index):
            raise DocumentIndexError(doc_index, len(self._index))

        return self._score_terms(position, self.tokenize(query))

    def _score_terms(self, doc_index: int, query_terms: List[str]) -> float:
        avgdl = self._index.avg_doc_length
        if not query_terms or avgdl == 0:
            # avgdl == 0 means every document is empty
            return 0.0

        doc_tf = self._index.doc_term_freqs[doc_index]
        doc_length = self._index.doc_lengths[doc_index]
        k1, b = self._params.k1, self._params.b

        is_long_doc = doc_length > LONG_DOC_FACTOR * avgdl
        length_penalty = min(1.0, avgdl / doc_length) if is_long_doc else 1.0

        score = 0.0
        for term in query_terms:
            tf = doc_tf.get(term, 0)
            if tf <= 0:
                continue

            weight = self.term_weight(term)
            numerator = tf * (k1 + 1)
            denominator = tf + k1 * (1 - b + b * (doc_length / avgdl))

            score += weight * numerator / denominator * length_penalty

        return score

    def search(self, query: str, top_n: int = 0) -> List[SearchResult]:
        """
        Rank all documents against a query.

        Args:
            query: Free-text query
            top_n: Maximum number of results; 0 or negative = no limit

        Returns:
            List of SearchResult with score > 0, sorted by score (descending)
            Length = min(top_n, matching documents) when top_n > 0

        Example:
            >>> engine = BM25S(["The quick brown fox jumps over the lazy dog",
            ...                 "A fox fled from danger", "Irrelevant document"])
            >>> [r.doc_index for r in engine.search("fox", 2)]
            [1, 0]
        """
        query_terms = self.tokenize(query)
        if not query_terms:
            return []

        results = []
        for i, doc in enumerate(self._index.documents):
            score = self._score_terms(i, query_terms)
            if score > 0:
                results.append(SearchResult(doc_index=i, score=score, doc=doc))

        results.sort(key=lambda r: r.score, reverse=True)

        if top_n > 0:
            results = results[:top_n]

        logger.debug(f"BM25S search: {len(query_terms)} query terms, {len(results)} results (top_n={top_n})")
        return results
