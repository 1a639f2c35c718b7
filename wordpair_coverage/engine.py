import logging
import time
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, List, Optional, Union

from .base import MAX_MASK_WIDTH, Alphabet, ConfigurationError, CoverageResult, PairScore
from .builder import WordIndex, WordIndexBuilder
from .codec import AlphabetCodec
from .corpus import read_tokens
from .parallel import parallel_filter, parallel_score
from .stages import DominanceFilter, PairScorer, ResultReporter


logger = logging.getLogger(__name__)

DEFAULT_CONFIG = {
    "mask_width": MAX_MASK_WIDTH,
    "workers": 1,
    "chunk_size": 256,
    "show_progress": False
}

ProgressCallback = Callable[[str, int], None]


class CoverageSearchEngine:
    """Finds the word pairs covering the most distinct alphabet letters."""

    def __init__(self, alphabet: Optional[Alphabet] = None, config: Optional[Dict[str, Any]] = None):
        self.config = dict(DEFAULT_CONFIG)
        if config:
            unknown = set(config) - set(DEFAULT_CONFIG)
            if unknown:
                raise ConfigurationError(f"Unknown config keys: {', '.join(sorted(unknown))}")
            self.config.update(config)

        for key in ("mask_width", "workers", "chunk_size"):
            try:
                self.config[key] = int(self.config[key])
            except (TypeError, ValueError) as e:
                raise ConfigurationError(f"{key} must be an integer, got {self.config[key]!r}") from e

        if self.config["workers"] < 1:
            raise ConfigurationError("workers must be at least 1")

        self.alphabet = alphabet or Alphabet.from_letters()
        self.codec = AlphabetCodec(self.alphabet, self.config["mask_width"])

        show_progress = bool(self.config["show_progress"])
        self.dominance_filter = DominanceFilter(show_progress)
        self.pair_scorer = PairScorer(show_progress)
        self.reporter = ResultReporter()

    def build_index(self, tokens: Iterable[str]) -> WordIndex:
        return WordIndexBuilder(self.codec).build(tokens)

    def dominant_masks(self, masks: Iterable[int]) -> List[int]:
        if self.config["workers"] > 1:
            return parallel_filter(list(masks), self.config["workers"], self.config["chunk_size"])
        return self.dominance_filter.filter(masks)

    def score_pairs(self, masks: List[int]) -> PairScore:
        if self.config["workers"] > 1:
            return parallel_score(masks, self.config["workers"], self.config["chunk_size"])
        return self.pair_scorer.score(masks)

    def search(self, tokens: Iterable[str], on_progress: Optional[ProgressCallback] = None) -> CoverageResult:
        """
        Run the full pipeline over normalized tokens.

        Args:
            tokens: Corpus tokens, duplicates allowed.
            on_progress: Optional callback receiving (stat_name, count) after
                each stage, in pipeline order.
        """
        start_time = time.time()

        def report(name: str, value: int):
            logger.info(f"{name}: {value}")
            if on_progress:
                on_progress(name, value)

        # 1. Deduplicate and group by mask
        index = self.build_index(tokens)
        report("raw_word_count", index.stats["raw_word_count"])
        report("unique_word_count", index.stats["unique_word_count"])
        report("unique_mask_count", index.stats["unique_mask_count"])

        # 2. Prune masks covered by richer ones
        stage_start = time.time()
        dominant = self.dominant_masks(index.distinct_masks)
        filter_time = time.time() - stage_start
        report("dominant_mask_count", len(dominant))

        # 3. Best pairs among the survivors
        stage_start = time.time()
        pair_score = self.score_pairs(dominant)
        score_time = time.time() - stage_start

        stats = dict(index.stats)
        stats.update({
            "dominant_mask_count": len(dominant),
            "filter_time": filter_time,
            "score_time": score_time,
            "elapsed": time.time() - start_time
        })

        result = self.reporter.expand(pair_score, index.mask_to_words, stats)
        if result.found:
            for first, second in result.mask_pairs:
                logger.debug(f"Winning masks {self.codec.decode(first)!r} + {self.codec.decode(second)!r}")
        else:
            logger.info("No pairs available: fewer than two dominant masks")
        return result

    def search_file(self, path: Union[str, Path],
                    on_progress: Optional[ProgressCallback] = None) -> CoverageResult:
        """Read a corpus file and search it. Raises CorpusUnavailable."""
        return self.search(read_tokens(path), on_progress)
