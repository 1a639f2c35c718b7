import logging
import re
from pathlib import Path
from typing import List, Union

from .base import CorpusUnavailable


logger = logging.getLogger(__name__)

SEPARATORS = " \t\r\n.,:;"
_SPLIT_RE = re.compile("[" + re.escape(SEPARATORS) + "]+")


def split_tokens(text: str) -> List[str]:
    """Split raw text into lowercased tokens, dropping empty pieces."""
    return [piece.lower() for piece in _SPLIT_RE.split(text) if piece]


def read_tokens(path: Union[str, Path], encoding: str = "utf-8") -> List[str]:
    """Read a corpus file and return all of its tokens, duplicates included."""
    path = Path(path)
    try:
        text = path.read_text(encoding=encoding, errors="replace")
    except FileNotFoundError as e:
        logger.error(f"Corpus file not found: {path}")
        raise CorpusUnavailable(f"Corpus file not found: {path}") from e
    except OSError as e:
        logger.error(f"Failed to read corpus {path}: {e}")
        raise CorpusUnavailable(f"Failed to read corpus {path}: {e}") from e

    tokens = split_tokens(text)
    logger.debug(f"Read {len(tokens)} tokens from {path}")
    return tokens
