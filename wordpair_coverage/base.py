from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, List, Tuple


DEFAULT_LETTERS = "abcdefghijklmnopqrstuvwxyzåäö"
MAX_MASK_WIDTH = 64

MaskPair = Tuple[int, int]
WordPair = Tuple[str, str]


class ConfigurationError(ValueError):
    """Alphabet cannot be represented as a single mask."""


class CorpusUnavailable(OSError):
    """Corpus file is missing or unreadable."""


class SearchStatus(Enum):
    """Outcome of a pair search."""
    FOUND = "found"
    NO_PAIRS_AVAILABLE = "no_pairs_available"


@dataclass(frozen=True)
class Alphabet:
    """Ordered set of allowed letters; letter i owns bit i."""
    letters: Tuple[str, ...]

    def __post_init__(self):
        for letter in self.letters:
            if not isinstance(letter, str):
                raise ConfigurationError(f"Alphabet letters must be strings, got {letter!r}")

        # Tokens are lowercased before stripping, so letters must be too
        letters = tuple(letter.lower() for letter in self.letters)
        seen = set()
        for letter in letters:
            if len(letter) != 1:
                raise ConfigurationError(f"Alphabet letters must be single characters, got {letter!r}")
            if letter in seen:
                raise ConfigurationError(f"Duplicate letter in alphabet: {letter!r}")
            seen.add(letter)
        object.__setattr__(self, "letters", letters)

    @classmethod
    def from_letters(cls, letters: Iterable[str] = DEFAULT_LETTERS) -> "Alphabet":
        return cls(tuple(letters))

    @property
    def size(self) -> int:
        return len(self.letters)

    def __contains__(self, letter: str) -> bool:
        return letter in self.letters


@dataclass
class PairScore:
    """Best combined letter count and every dominant mask pair reaching it."""
    best_score: int = 0
    winning_pairs: List[MaskPair] = field(default_factory=list)

    @classmethod
    def empty(cls) -> "PairScore":
        return cls()

    @property
    def status(self) -> SearchStatus:
        if self.winning_pairs:
            return SearchStatus.FOUND
        return SearchStatus.NO_PAIRS_AVAILABLE

    def merge(self, other: "PairScore") -> "PairScore":
        """
        Combine two partial scores.

        The higher score wins; on a tie the pair lists are concatenated,
        this one first. An empty score is the identity.
        """
        if not other.winning_pairs:
            return PairScore(self.best_score, list(self.winning_pairs))
        if not self.winning_pairs or other.best_score > self.best_score:
            return PairScore(other.best_score, list(other.winning_pairs))
        if other.best_score < self.best_score:
            return PairScore(self.best_score, list(self.winning_pairs))
        return PairScore(self.best_score, self.winning_pairs + other.winning_pairs)


@dataclass
class CoverageResult:
    """Final answer of a search, expanded back to words."""
    score: int
    word_pairs: List[WordPair] = field(default_factory=list)
    mask_pairs: List[MaskPair] = field(default_factory=list)
    stats: Dict[str, Any] = field(default_factory=dict)

    @property
    def status(self) -> SearchStatus:
        if self.mask_pairs:
            return SearchStatus.FOUND
        return SearchStatus.NO_PAIRS_AVAILABLE

    @property
    def found(self) -> bool:
        return self.status is SearchStatus.FOUND

    def format_pairs(self) -> str:
        return ", ".join(f"{first} {second}" for first, second in self.word_pairs)

    def summary_line(self) -> str:
        if not self.found:
            return "No pairs available (fewer than two dominant masks)"
        return f"Score: {self.score}, Words: {self.format_pairs()}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "status": self.status.value,
            "score": self.score,
            "word_pairs": [list(pair) for pair in self.word_pairs],
            "mask_pairs": [list(pair) for pair in self.mask_pairs],
            "stats": dict(self.stats)
        }
