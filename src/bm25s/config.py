"""
BM25S configuration and automatic parameter tuning.

Parameters:
    k1: Term frequency saturation
        Higher = more weight to repeated terms
    b: Length normalization (0.0 - 1.0)
        Higher = more penalty for long documents

Auto-tuning (decided once, after the index is built):
    avg document length <= 100 terms → k1=1.2, b=0.3  (short texts)
    avg document length >  100 terms → k1=1.5, b=0.75 (classic BM25)

A value set explicitly by the caller is pinned and never auto-tuned.

Config (env vars, see BM25SConfig.from_env):
    BM25S_K1: Pinned k1 (optional)
    BM25S_B: Pinned b (optional)
    BM25S_USE_IWF: "true" to use IWF weighting (default: false)
    BM25S_LANGUAGE: Language hint for stemming (default: auto)
"""

import logging
import math
import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional, Union

from dotenv import load_dotenv

from .exceptions import ConfigurationError
from .stemmer import LANGUAGE_AUTO
from .tokenizer import TokenizerLike

logger = logging.getLogger(__name__)

SHORT_K1 = 1.2
SHORT_B = 0.3
LONG_K1 = 1.5
LONG_B = 0.75

# Average document length (in terms) above which long defaults apply
LONG_DOC_AVG_THRESHOLD = 100.0


class ParameterSource(Enum):
    """Where an effective k1/b value came from"""
    AUTO_SHORT = "auto_short"
    AUTO_LONG = "auto_long"
    PINNED = "pinned"


@dataclass(frozen=True)
class ResolvedParameters:
    """Effective BM25 parameters used for scoring"""
    k1: float
    b: float
    k1_source: ParameterSource
    b_source: ParameterSource


@dataclass(frozen=True)
class BM25SConfig:
    """
    Construction-time configuration for BM25S.

    k1/b set to None mean "auto"; any float pins the value.
    """
    k1: Optional[float] = None
    b: Optional[float] = None
    use_iwf: bool = False
    tokenizer: Optional[TokenizerLike] = None
    language: str = LANGUAGE_AUTO

    def __post_init__(self):
        if self.k1 is not None:
            if not _is_finite_number(self.k1) or self.k1 < 0:
                raise ConfigurationError(f"k1 must be a finite number >= 0, got {self.k1!r}")
        if self.b is not None:
            if not _is_finite_number(self.b) or not 0.0 <= self.b <= 1.0:
                raise ConfigurationError(f"b must be a number in [0, 1], got {self.b!r}")
        if self.tokenizer is not None and not callable(self.tokenizer):
            raise ConfigurationError(
                f"Tokenizer must be callable, got {type(self.tokenizer).__name__}"
            )

    @classmethod
    def from_env(cls, env_file: Optional[Union[str, Path]] = None) -> "BM25SConfig":
        """
        Create configuration from environment variables.

        Args:
            env_file: Optional .env file loaded first (existing env vars win)

        Returns:
            BM25SConfig (default tokenizer)

        Raises:
            ConfigurationError: If a variable cannot be parsed
        """
        if env_file is not None and Path(env_file).exists():
            load_dotenv(env_file)

        k1 = _float_env("BM25S_K1")
        b = _float_env("BM25S_B")

        use_iwf_value = os.getenv("BM25S_USE_IWF", "false").strip().lower()
        if use_iwf_value not in ("true", "false", "1", "0", "yes", "no", ""):
            raise ConfigurationError(f"BM25S_USE_IWF must be true or false, got {use_iwf_value!r}")
        use_iwf = use_iwf_value in ("true", "1", "yes")

        language = os.getenv("BM25S_LANGUAGE", LANGUAGE_AUTO)

        logger.debug(f"BM25S config from env: k1={k1}, b={b}, use_iwf={use_iwf}, language={language}")
        return cls(k1=k1, b=b, use_iwf=use_iwf, language=language)


def resolve_parameters(config: BM25SConfig, avg_doc_length: float) -> ResolvedParameters:
    """
    Pick effective k1 and b for a built collection.

    Args:
        config: Caller configuration (None = auto)
        avg_doc_length: Average document length of the indexed collection

    Returns:
        ResolvedParameters with the value and source of each parameter
    """
    is_long = avg_doc_length > LONG_DOC_AVG_THRESHOLD
    auto_source = ParameterSource.AUTO_LONG if is_long else ParameterSource.AUTO_SHORT

    if config.k1 is not None:
        k1, k1_source = float(config.k1), ParameterSource.PINNED
    else:
        k1, k1_source = (LONG_K1 if is_long else SHORT_K1), auto_source

    if config.b is not None:
        b, b_source = float(config.b), ParameterSource.PINNED
    else:
        b, b_source = (LONG_B if is_long else SHORT_B), auto_source

    logger.debug(
        f"Resolved BM25S parameters: k1={k1} ({k1_source.value}), b={b} ({b_source.value}), "
        f"avg doc length={avg_doc_length:.2f}"
    )
    return ResolvedParameters(k1=k1, b=b, k1_source=k1_source, b_source=b_source)


def _is_finite_number(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and math.isfinite(value)


def _float_env(name: str) -> Optional[float]:
    value = os.getenv(name)
    if value is None or not value.strip():
        return None
    try:
        return float(value)
    except ValueError:
        raise ConfigurationError(f"{name} must be a number, got {value!r}")
