"""
BM25S (BM25 for Short texts) ranking engine.

Scores short documents against free-text queries with BM25, auto-tuned
for collection length, with English/Russian Snowball stemming.

Components:
- stemmer: Script-aware stemming (Cyrillic → Russian, Latin → English)
- tokenizer: Text tokenization for term extraction (pluggable)
- index_builder: Per-document term frequencies and collection statistics
- config: Configuration and automatic k1/b tuning
- weighting: IDF or IWF term weights
- scorer: BM25S scoring and top-N search

Usage:
    from src.bm25s import BM25S

    engine = BM25S(["A fox fled from danger", "Irrelevant document"], "en")
    best = engine.search("fox", top_n=1)
    if best and best[0].score > 0:
        print(best[0].doc)
"""

from .config import (
    BM25SConfig,
    LONG_B,
    LONG_K1,
    LONG_DOC_AVG_THRESHOLD,
    ParameterSource,
    ResolvedParameters,
    SHORT_B,
    SHORT_K1,
    resolve_parameters,
)
from .exceptions import BM25SError, ConfigurationError, DocumentIndexError
from .index_builder import CollectionIndex, build_index
from .scorer import BM25S, SearchResult
from .stemmer import normalize_language, stem
from .tokenizer import CallableTokenizer, StemmingTokenizer, Tokenizer, tokenize
from .weighting import Weighting, idf, iwf, term_weight

__all__ = [
    "BM25S",
    "SearchResult",
    "BM25SConfig",
    "ResolvedParameters",
    "ParameterSource",
    "resolve_parameters",
    "SHORT_K1",
    "SHORT_B",
    "LONG_K1",
    "LONG_B",
    "LONG_DOC_AVG_THRESHOLD",
    "BM25SError",
    "ConfigurationError",
    "DocumentIndexError",
    "CollectionIndex",
    "build_index",
    "Tokenizer",
    "StemmingTokenizer",
    "CallableTokenizer",
    "tokenize",
    "stem",
    "normalize_language",
    "Weighting",
    "idf",
    "iwf",
    "term_weight",
]
