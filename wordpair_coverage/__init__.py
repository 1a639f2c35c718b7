from typing import Any, Iterable, Optional

from .base import (
    Alphabet,
    ConfigurationError,
    CorpusUnavailable,
    CoverageResult,
    PairScore,
    SearchStatus,
)
from .builder import WordIndex, WordIndexBuilder
from .codec import AlphabetCodec
from .corpus import read_tokens, split_tokens
from .engine import CoverageSearchEngine
from .stages import DominanceFilter, PairScorer, ResultReporter


__all__ = [
    "CoverageSearchEngine",
    "AlphabetCodec",
    "WordIndexBuilder",
    "WordIndex",
    "DominanceFilter",
    "PairScorer",
    "ResultReporter",
    "Alphabet",
    "PairScore",
    "CoverageResult",
    "SearchStatus",
    "ConfigurationError",
    "CorpusUnavailable",
    "read_tokens",
    "split_tokens",
    "load_engine"
]

__version__ = "1.0.0"


def load_engine(letters: Optional[Iterable[str]] = None, **config: Any) -> CoverageSearchEngine:
    """
    Factory function to build a search engine.

    Args:
        letters: Alphabet letters in bit order (default: a-z, å, ä, ö)
        **config: Overrides for CoverageSearchEngine.config
                  (mask_width, workers, chunk_size, show_progress)
    """
    alphabet = Alphabet.from_letters(letters) if letters is not None else Alphabet.from_letters()
    return CoverageSearchEngine(alphabet, config or None)
