import logging
import multiprocessing as mp
import os
from functools import reduce
from typing import List, Optional, Sequence, Tuple

from .base import PairScore
from .stages import DominanceFilter, PairScorer
from .utils import chunk_ranges


logger = logging.getLogger(__name__)


def _filter_worker(chunk: List[int]) -> List[int]:
    return DominanceFilter().filter(chunk)


def _score_worker(args: Tuple[List[int], int, int]) -> PairScore:
    masks, start, stop = args
    return PairScorer().score_rows(masks, start, stop)


def _worker_count(workers: Optional[int]) -> int:
    count = workers if workers is not None else (os.cpu_count() or 1)
    return max(1, int(count))


def _pool(workers: int):
    start_methods = mp.get_all_start_methods()
    ctx = mp.get_context("fork" if "fork" in start_methods else "spawn")
    return ctx.Pool(processes=workers)


def parallel_filter(masks: Sequence[int], workers: Optional[int] = None, chunk_size: int = 256) -> List[int]:
    """
    Dominance filter over independent chunks plus one cross-chunk pass.

    Every globally dominant mask survives its own chunk, so filtering the
    concatenated survivors yields the same set as a serial run.
    """
    masks = list(masks)
    worker_count = _worker_count(workers)
    ranges = chunk_ranges(len(masks), chunk_size)
    if worker_count == 1 or len(ranges) <= 1:
        return DominanceFilter().filter(masks)

    chunks = [masks[start:stop] for start, stop in ranges]
    with _pool(worker_count) as pool:
        survivors = pool.map(_filter_worker, chunks, chunksize=1)

    merged = [mask for chunk in survivors for mask in chunk]
    logger.debug(f"{len(chunks)} chunks kept {len(merged)} of {len(masks)} masks before the cross-chunk pass")
    return DominanceFilter().filter(merged)


def parallel_score(masks: Sequence[int], workers: Optional[int] = None, chunk_size: int = 256) -> PairScore:
    """
    Pair scoring split by outer row ranges.

    Workers get plain lists of ints and return fresh PairScore values; row
    ranges are merged in order, so ties come out in the same order as the
    serial scan.
    """
    masks = list(masks)
    if len(masks) < 2:
        return PairScore.empty()

    worker_count = _worker_count(workers)
    ranges = chunk_ranges(len(masks) - 1, chunk_size)
    if worker_count == 1 or len(ranges) <= 1:
        return PairScorer().score(masks)

    tasks = [(masks, start, stop) for start, stop in ranges]
    with _pool(worker_count) as pool:
        partials = pool.map(_score_worker, tasks, chunksize=1)

    return reduce(PairScore.merge, partials, PairScore.empty())
