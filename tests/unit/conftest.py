"""Unit test configuration - isolate env-driven settings"""

import pytest


@pytest.fixture(autouse=True)
def clean_bm25s_env(monkeypatch):
    """Unit tests never see BM25S_* / LOG_LEVEL from the developer shell"""
    for name in ("BM25S_K1", "BM25S_B", "BM25S_USE_IWF", "BM25S_LANGUAGE", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    yield
