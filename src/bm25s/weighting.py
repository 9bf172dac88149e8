"""
Term weighting strategies for BM25S.

IDF (Inverse Document Frequency, default):
    idf(term) = ln((N + 1) / (df + 0.5)) + 1

    Smoothed so the weight stays positive even for terms present in every
    document, and is defined for unseen terms (df = 0).

IWF (Inverse Word Frequency):
    iwf(term) = ln(total_terms / total_freq(term))

    Based on occurrences across the whole collection instead of document
    counts. Unseen terms weigh 0.

Where:
    N = number of documents
    df = documents containing the term
    total_terms = number of terms in the collection
    total_freq = occurrences of the term in the collection
"""

import math
from enum import Enum

from .index_builder import CollectionIndex


class Weighting(Enum):
    """Supported term weighting strategies"""
    IDF = "idf"
    IWF = "iwf"


def idf(term: str, index: CollectionIndex) -> float:
    df = index.document_frequency(term)
    return math.log((len(index) + 1) / (df + 0.5)) + 1.0


def iwf(term: str, index: CollectionIndex) -> float:
    total_freq = index.total_frequency(term)
    if total_freq == 0:
        return 0.0
    return math.log(index.total_terms / total_freq)


def term_weight(term: str, index: CollectionIndex, weighting: Weighting = Weighting.IDF) -> float:
    """
    Weight of a term under the selected strategy.

    Args:
        term: Normalized (tokenized) term
        index: Collection statistics
        weighting: Weighting.IDF or Weighting.IWF

    Returns:
        Term importance weight
    """
    if weighting is Weighting.IWF:
        return iwf(term, index)
    return idf(term, index)
