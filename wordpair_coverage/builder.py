import logging
import time
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Tuple

from .codec import AlphabetCodec


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WordIndex:
    """Distinct stripped words grouped by their letter mask."""
    mask_to_words: Dict[int, Tuple[str, ...]]
    distinct_masks: Tuple[int, ...]
    stats: Dict[str, Any] = field(default_factory=dict)

    def words_for(self, mask: int) -> Tuple[str, ...]:
        return self.mask_to_words.get(mask, ())

    def all_words(self) -> List[str]:
        return [word for mask in self.distinct_masks for word in self.mask_to_words[mask]]


class WordIndexBuilder:
    """Builds the mask -> words index from corpus tokens."""

    def __init__(self, codec: AlphabetCodec):
        self.codec = codec

        self.unique_tokens: List[str] = []
        self.mask_to_words: Dict[int, List[str]] = {}
        self.distinct_masks: List[int] = []

        self.stats = {
            "raw_word_count": 0,
            "unique_word_count": 0,
            "unique_mask_count": 0,
            "build_time": 0
        }

    def build(self, tokens: Iterable[str]) -> WordIndex:
        """
        Execute the full building pipeline.

        Args:
            tokens: Normalized corpus tokens, duplicates allowed. Tokens may
                contain characters outside the alphabet.
        """
        start_time = time.time()

        self._collect_unique_tokens(tokens)
        self._group_by_mask()

        self.stats["build_time"] = time.time() - start_time
        logger.debug(
            f"Indexed {self.stats['unique_word_count']} unique words into "
            f"{self.stats['unique_mask_count']} masks in {self.stats['build_time']:.3f}s"
        )

        return WordIndex(
            mask_to_words={mask: tuple(words) for mask, words in self.mask_to_words.items()},
            distinct_masks=tuple(self.distinct_masks),
            stats=dict(self.stats)
        )

    def _collect_unique_tokens(self, tokens: Iterable[str]):
        raw_count = 0
        seen = {}
        for token in tokens:
            raw_count += 1
            seen.setdefault(token.lower(), None)

        self.unique_tokens = list(seen)
        self.stats["raw_word_count"] = raw_count
        self.stats["unique_word_count"] = len(self.unique_tokens)

    def _group_by_mask(self):
        self.mask_to_words = {}
        self.distinct_masks = []
        placed = set()
        for token in self.unique_tokens:
            stripped = self.codec.strip(token)
            # "ab1" and "ab" collapse to the same stripped word
            if stripped in placed:
                continue
            placed.add(stripped)

            mask = self.codec.encode(stripped)
            if mask not in self.mask_to_words:
                self.mask_to_words[mask] = []
                self.distinct_masks.append(mask)
            self.mask_to_words[mask].append(stripped)

        self.stats["unique_mask_count"] = len(self.distinct_masks)
