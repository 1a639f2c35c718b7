from typing import List, Tuple


def popcount(mask: int) -> int:
    """Number of set bits in the mask."""
    return mask.bit_count()


def is_subset(small: int, large: int) -> bool:
    return small & large == small


def is_strict_subset(small: int, large: int) -> bool:
    return small != large and small & large == small


def chunk_ranges(total: int, chunk_size: int) -> List[Tuple[int, int]]:
    """Split range(total) into contiguous (start, stop) pieces."""
    chunk_size = max(1, int(chunk_size))
    return [
        (start, min(start + chunk_size, total))
        for start in range(0, total, chunk_size)
    ]
