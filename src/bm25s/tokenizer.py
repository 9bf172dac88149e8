"""
Tokenizer for BM25S text processing.

Tokenization pipeline:
1. Lowercase conversion
2. Split on whitespace
3. Trim punctuation .,!?;:"'()[]{} from both ends of each word
4. Drop words shorter than 2 characters
5. Apply script-aware stemming (English or Russian Snowball)
6. Return list of terms (duplicates kept, they count as term frequency)

Any other tokenizer can replace the whole pipeline: subclass Tokenizer,
or pass a plain function `text -> list of terms` to the engine.
"""

from abc import ABC, abstractmethod
from typing import Callable, List, Sequence, Union

from .exceptions import ConfigurationError
from .stemmer import LANGUAGE_AUTO, normalize_language, stem

# Characters trimmed from both ends of each word
PUNCTUATION = ".,!?;:\"'()[]{}"

MIN_TERM_LENGTH = 2


class Tokenizer(ABC):
    """
    Abstract tokenizer interface.

    Used for both documents and queries, so a custom implementation fully
    controls what counts as a match.
    """

    @abstractmethod
    def tokenize(self, text: str) -> List[str]:
        """
        Split text into index terms.

        Args:
            text: Raw document or query text

        Returns:
            Ordered list of terms, repeated terms included
        """
        pass

    def __call__(self, text: str) -> List[str]:
        return self.tokenize(text)


class StemmingTokenizer(Tokenizer):
    """Default whitespace tokenizer with script-aware Snowball stemming"""

    def __init__(self, language: str = LANGUAGE_AUTO):
        self.language = normalize_language(language)

    def tokenize(self, text: str) -> List[str]:
        return tokenize(text, self.language)

    def __repr__(self) -> str:
        return f"StemmingTokenizer(language={self.language!r})"


class CallableTokenizer(Tokenizer):
    """Adapter for a plain `str -> Sequence[str]` function"""

    def __init__(self, func: Callable[[str], Sequence[str]]):
        self.func = func

    def tokenize(self, text: str) -> List[str]:
        return list(self.func(text))

    def __repr__(self) -> str:
        name = getattr(self.func, "__name__", type(self.func).__name__)
        return f"CallableTokenizer({name})"


TokenizerLike = Union[Tokenizer, Callable[[str], Sequence[str]]]


def tokenize(text: str, language: str = LANGUAGE_AUTO) -> List[str]:
    """
    Tokenize and stem text for BM25S scoring.

    Args:
        text: Input text to tokenize
        language: Normalized language hint passed to the stemmer

    Returns:
        List of lowercase stemmed terms

    Examples:
        >>> tokenize("The quick brown fox jumps")
        ['the', 'quick', 'brown', 'fox', 'jump']

        >>> tokenize("Лисица убегала!")
        ['лисиц', 'убега']

        >>> tokenize(".,!? a")
        []
    """
    if not text:
        return []

    terms = []
    for word in text.lower().split():
        word = word.strip(PUNCTUATION)

        # len() counts code points, so "яд" is kept and "я" is dropped
        if len(word) < MIN_TERM_LENGTH:
            continue

        terms.append(stem(word, language))

    return terms


def resolve_tokenizer(tokenizer: TokenizerLike = None, language: str = LANGUAGE_AUTO) -> Tokenizer:
    """
    Turn the user-supplied tokenizer option into a Tokenizer instance.

    Args:
        tokenizer: Tokenizer instance, plain function, or None for the default
        language: Language hint for the default StemmingTokenizer

    Returns:
        Tokenizer used for both indexing and queries

    Raises:
        ConfigurationError: If tokenizer is neither None nor callable
    """
    if tokenizer is None:
        return StemmingTokenizer(language)
    if isinstance(tokenizer, Tokenizer):
        return tokenizer
    if not callable(tokenizer):
        raise ConfigurationError(
            f"Tokenizer must be callable, got {type(tokenizer).__name__}"
        )
    return CallableTokenizer(tokenizer)
