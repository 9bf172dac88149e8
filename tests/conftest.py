"""Pytest configuration shared by all BM25S tests"""

import sys
from pathlib import Path

import pytest

# Add project root to path for src imports
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from src.bm25s import BM25S  # noqa: E402


ENGLISH_DOCS = [
    "The quick brown fox jumps over the lazy dog",
    "A fox fled from danger",
]

RUSSIAN_DOCS = [
    "Быстрая лисица перепрыгнула через собаку",
    "Лисица убегала от опасности",
    "Нерелевантный документ",
]


@pytest.fixture
def english_docs():
    return list(ENGLISH_DOCS)


@pytest.fixture
def russian_docs():
    return list(RUSSIAN_DOCS)


@pytest.fixture
def fox_engine():
    """English collection with one irrelevant document"""
    return BM25S(ENGLISH_DOCS + ["Irrelevant document"], "en")
