import logging
from itertools import product
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from tqdm import tqdm

from .base import CoverageResult, PairScore
from .utils import is_strict_subset, is_subset, popcount


logger = logging.getLogger(__name__)


def progress(iterable, desc: str = "", total: Optional[int] = None, enabled: bool = False):
    return tqdm(iterable, desc=desc, total=total, disable=not enabled, leave=False)


class DominanceFilter:
    """
    Reduces masks to the maximal elements of the bitwise-subset order.

    A mask is dropped when some other mask contains all of its letters.
    Cost is O(D^2) single AND comparisons for D distinct masks.
    """

    def __init__(self, show_progress: bool = False):
        self.show_progress = show_progress

    def filter(self, masks: Iterable[int]) -> List[int]:
        dominant: List[int] = []
        for candidate in progress(masks, desc="Dominance", enabled=self.show_progress):
            survivors = []
            covered = False
            for existing in dominant:
                # Equal masks count as covered so re-filtering is a no-op
                if is_subset(candidate, existing):
                    covered = True
                    break
                if is_strict_subset(existing, candidate):
                    continue
                survivors.append(existing)

            if covered:
                continue
            survivors.append(candidate)
            dominant = survivors

        return dominant


class PairScorer:
    """Scores every unordered pair of masks by the popcount of their union."""

    def __init__(self, show_progress: bool = False):
        self.show_progress = show_progress

    def score(self, masks: Sequence[int]) -> PairScore:
        if len(masks) < 2:
            return PairScore.empty()
        return self.score_rows(masks, 0, len(masks) - 1)

    def score_rows(self, masks: Sequence[int], start: int, stop: int) -> PairScore:
        """
        Score pairs (i, j) with start <= i < stop and i < j < len(masks).

        Pairs are collected in scan order; ties are all kept.
        """
        best = -1
        winners: List[Tuple[int, int]] = []
        count = len(masks)
        rows = progress(range(start, stop), desc="Pairs", total=stop - start, enabled=self.show_progress)
        for i in rows:
            first = masks[i]
            for j in range(i + 1, count):
                second = masks[j]
                combined = popcount(first | second)
                if combined > best:
                    best = combined
                    winners = [(first, second)]
                elif combined == best:
                    winners.append((first, second))

        if not winners:
            return PairScore.empty()
        return PairScore(best, winners)


class ResultReporter:
    """Expands winning mask pairs into concrete word pairs."""

    def expand(self, pair_score: PairScore, mask_to_words: Mapping[int, Sequence[str]],
               stats: Optional[Dict[str, Any]] = None) -> CoverageResult:
        word_pairs = []
        for first, second in pair_score.winning_pairs:
            word_pairs.extend(product(mask_to_words[first], mask_to_words[second]))

        result = CoverageResult(
            score=pair_score.best_score,
            word_pairs=word_pairs,
            mask_pairs=list(pair_score.winning_pairs),
            stats=dict(stats or {})
        )
        logger.debug(f"Expanded {len(result.mask_pairs)} mask pairs into {len(word_pairs)} word pairs")
        return result
