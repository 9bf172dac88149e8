"""
BM25S index builder - term statistics for a fixed document collection.

One pass over the documents produces:
- term frequencies per document ({term: count}, one dict per document)
- document lengths (number of terms after tokenization)
- document frequency per term (documents containing it at least once)
- total frequency per term (occurrences across the whole collection)
- total number of terms and average document length

The index is immutable once built: no add/remove/update.
"""

import logging
from collections import Counter
from dataclasses import dataclass
from types import MappingProxyType
from typing import List, Mapping, Sequence, Tuple

from .tokenizer import Tokenizer

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CollectionIndex:
    """Read-only term statistics for a document collection"""
    documents: Tuple[str, ...]
    doc_term_freqs: Tuple[Mapping[str, int], ...]
    doc_lengths: Tuple[int, ...]
    term_doc_freq: Mapping[str, int]
    term_total_freq: Mapping[str, int]
    total_terms: int
    avg_doc_length: float

    def __len__(self) -> int:
        return len(self.documents)

    def document_frequency(self, term: str) -> int:
        """Number of documents containing term (0 if unknown)"""
        return self.term_doc_freq.get(term, 0)

    def total_frequency(self, term: str) -> int:
        """Occurrences of term across the collection (0 if unknown)"""
        return self.term_total_freq.get(term, 0)


def build_index(documents: Sequence[str], tokenizer: Tokenizer) -> CollectionIndex:
    """
    Build collection statistics in a single pass.

    Args:
        documents: Document texts, identified by position
        tokenizer: Tokenizer applied to every document

    Returns:
        CollectionIndex with index-aligned per-document tables

    Example:
        >>> index = build_index(["The quick brown fox jumps", "The fox fled from danger", ""],
        ...                     StemmingTokenizer())
        >>> index.doc_lengths
        (5, 5, 0)
        >>> index.document_frequency("fox")
        2
    """
    documents = tuple(documents)

    doc_term_freqs: List[Mapping[str, int]] = []
    doc_lengths: List[int] = []
    term_doc_freq: Counter = Counter()
    term_total_freq: Counter = Counter()

    for doc in documents:
        terms = tokenizer.tokenize(doc)
        tf = Counter(terms)

        doc_lengths.append(len(terms))
        doc_term_freqs.append(MappingProxyType(dict(tf)))

        term_total_freq.update(tf)
        # Each distinct term counts once per document
        term_doc_freq.update(tf.keys())

    total_terms = sum(doc_lengths)
    avg_doc_length = total_terms / len(documents) if documents else 0.0

    logger.debug(
        f"Built BM25S index: {len(documents)} documents, {len(term_doc_freq)} unique terms, "
        f"{total_terms} total terms, avg length {avg_doc_length:.2f}"
    )

    return CollectionIndex(
        documents=documents,
        doc_term_freqs=tuple(doc_term_freqs),
        doc_lengths=tuple(doc_lengths),
        term_doc_freq=MappingProxyType(dict(term_doc_freq)),
        term_total_freq=MappingProxyType(dict(term_total_freq)),
        total_terms=total_terms,
        avg_doc_length=avg_doc_length,
    )
