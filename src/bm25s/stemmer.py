"""
Script-aware Snowball stemmer for English and Russian (via NLTK).

Each word is stemmed on its own, so one document may mix scripts:
- Word contains a digit → returned unchanged ("bm25", "2024")
- More Cyrillic than Latin letters → Russian Snowball
- More Latin than Cyrillic letters → English Snowball
- Tie (including no letters of either script) → try both, keep the first
  stemmer that actually changes the word

Examples:
- "strategies" → "strategi"
- "лисица" → "лисиц"
- "v2" → "v2"

The language hint only affects the tie case: "en" tries English first,
"ru" and "auto" try Russian first.
"""

import logging
from typing import Optional, Tuple

from nltk.stem.snowball import SnowballStemmer

logger = logging.getLogger(__name__)

# Initialize stemmers once (stateless, reusable)
_english = SnowballStemmer('english')
_russian = SnowballStemmer('russian')

LANGUAGE_AUTO = "auto"
LANGUAGE_ENGLISH = "en"
LANGUAGE_RUSSIAN = "ru"

_LANGUAGE_ALIASES = {
    "": LANGUAGE_AUTO,
    "auto": LANGUAGE_AUTO,
    "en": LANGUAGE_ENGLISH,
    "english": LANGUAGE_ENGLISH,
    "ru": LANGUAGE_RUSSIAN,
    "russian": LANGUAGE_RUSSIAN,
}


def normalize_language(language: Optional[str]) -> str:
    """
    Map a language hint to one of "auto", "en", "ru".

    Unknown hints fall back to "auto" with a warning, never an error.

    Examples:
        >>> normalize_language("English")
        'en'
        >>> normalize_language("de")
        'auto'
    """
    if language is None:
        return LANGUAGE_AUTO
    key = language.strip().lower()
    if key not in _LANGUAGE_ALIASES:
        logger.warning(f"Unrecognized language hint '{language}', using default stemming")
        return LANGUAGE_AUTO
    return _LANGUAGE_ALIASES[key]


def count_scripts(word: str) -> Tuple[int, int, int]:
    """Count (cyrillic, latin, digit) characters in a word."""
    cyr = lat = digits = 0
    for ch in word:
        if 'а' <= ch <= 'я' or 'А' <= ch <= 'Я':
            cyr += 1
        elif 'a' <= ch <= 'z' or 'A' <= ch <= 'Z':
            lat += 1
        elif '0' <= ch <= '9':
            digits += 1
    return cyr, lat, digits


def stem_english(word: str) -> str:
    return _english.stem(word)


def stem_russian(word: str) -> str:
    """
    Russian Snowball stem, restricted to suffix removal.

    NLTK transliterates the whole word and back, which turns Latin letters
    of mixed-script words into Cyrillic ("abвг" → "абвг"). Only results that
    are a prefix of the word (ё read as е) are accepted.
    """
    stemmed = _russian.stem(word)
    if not word.replace('ё', 'е').startswith(stemmed):
        return word
    return stemmed


def stem(word: str, language: str = LANGUAGE_AUTO) -> str:
    """
    Stem a single word, picking the Snowball algorithm by dominant script.

    Args:
        word: Lowercase word to stem
        language: Normalized language hint ("auto", "en", "ru"),
            decides which stemmer goes first when scripts are tied

    Returns:
        Stemmed word (or the word itself if it holds digits)

    Examples:
        >>> stem("searching")
        'search'
        >>> stem("опасности")
        'опасн'
        >>> stem("bm25")
        'bm25'
    """
    cyr, lat, digits = count_scripts(word)

    if digits > 0:
        return word
    if cyr > lat:
        return stem_russian(word)
    if lat > cyr:
        return stem_english(word)

    # Tied scripts: keep the first stemmer that changes the word
    if language == LANGUAGE_ENGLISH:
        candidates = (stem_english, stem_russian)
    else:
        candidates = (stem_russian, stem_english)

    for stemmer in candidates:
        stemmed = stemmer(word)
        if stemmed and stemmed != word:
            return stemmed

    return word
