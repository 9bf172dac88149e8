"""Exceptions raised by the BM25S ranking engine"""


class BM25SError(Exception):
    """Base class for all BM25S errors"""


class ConfigurationError(BM25SError, ValueError):
    """Invalid engine configuration (bad k1/b, non-callable tokenizer, bad env value)"""


class DocumentIndexError(BM25SError, IndexError):
    """Document index outside the indexed collection"""

    def __init__(self, doc_index: int, doc_count: int):
        self.doc_index = doc_index
        self.doc_count = doc_count
        super().__init__(
            f"Document index {doc_index} out of range "
            f"(collection has {doc_count} documents)"
        )
