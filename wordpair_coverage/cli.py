import argparse
import logging
import sys
import time
from typing import List, Optional

from .base import DEFAULT_LETTERS, Alphabet, ConfigurationError, CorpusUnavailable
from .corpus import read_tokens
from .engine import CoverageSearchEngine


DEFAULT_CORPUS_PATH = "alastalon_salissa.txt"
USAGE_MESSAGE = "USAGE: wordpair-coverage path_to_txt"

PROGRESS_LABELS = {
    "raw_word_count": "Word count",
    "unique_word_count": "Unique word count",
    "unique_mask_count": "Unique mask count (distinct letter sets, \"lola\" -> \"alo\")",
    "dominant_mask_count": "Dominant mask count (\"hei\" covers \"ei\")"
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="wordpair-coverage",
        description="Find the word pairs that together use the most distinct letters."
    )
    parser.add_argument("path", nargs="?", default=DEFAULT_CORPUS_PATH,
                        help=f"corpus text file (default: {DEFAULT_CORPUS_PATH})")
    parser.add_argument("--letters", default=DEFAULT_LETTERS,
                        help="alphabet to score against, as one string")
    parser.add_argument("--workers", type=int, default=1,
                        help="processes for the quadratic stages")
    parser.add_argument("--progress", action="store_true",
                        help="show progress bars for the quadratic stages")
    parser.add_argument("-v", "--verbose", action="store_true", help="log stage details")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )
    start_time = time.time()

    try:
        engine = CoverageSearchEngine(
            Alphabet.from_letters(args.letters),
            {"workers": args.workers, "show_progress": args.progress}
        )
    except ConfigurationError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 2

    def print_progress(name: str, value: int):
        print(f"{PROGRESS_LABELS.get(name, name)}: {value}")

    try:
        tokens = read_tokens(args.path)
    except CorpusUnavailable:
        # A missing corpus is a clean no-op
        print(USAGE_MESSAGE)
        return 0

    print(f"Reading file {args.path}...")
    result = engine.search(tokens, on_progress=print_progress)

    print()
    print(result.summary_line())
    print(f"Elapsed time: {time.time() - start_time:.3f}s")
    return 0


if __name__ == "__main__":
    sys.exit(main())
