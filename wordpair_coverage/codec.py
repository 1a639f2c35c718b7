import logging
from typing import Dict

from .base import MAX_MASK_WIDTH, Alphabet, ConfigurationError


logger = logging.getLogger(__name__)


class AlphabetCodec:
    """Maps words to letter-presence bitmasks over a fixed alphabet."""

    def __init__(self, alphabet: Alphabet, mask_width: int = MAX_MASK_WIDTH):
        if alphabet.size > mask_width:
            raise ConfigurationError(
                f"Alphabet has {alphabet.size} letters but masks hold only {mask_width} bits"
            )
        self.alphabet = alphabet
        self.mask_width = mask_width
        self._bits: Dict[str, int] = {
            letter: 1 << index for index, letter in enumerate(alphabet.letters)
        }
        logger.debug(f"Codec ready for {alphabet.size} letters")

    @property
    def full_mask(self) -> int:
        return (1 << self.alphabet.size) - 1

    def strip(self, token: str) -> str:
        """Drop every character outside the alphabet, keeping order."""
        return "".join(char for char in token.lower() if char in self._bits)

    def encode(self, word: str) -> int:
        """
        Build the presence mask of a word.

        Bit i is set iff alphabet letter i occurs at least once. Characters
        outside the alphabet are ignored, so "" and "123" both encode to 0.
        """
        mask = 0
        for char in word:
            bit = self._bits.get(char)
            if bit:
                mask |= bit
        return mask

    def decode(self, mask: int) -> str:
        """Letters present in the mask, in alphabet order ("lola" -> "alo")."""
        return "".join(
            letter for letter, bit in self._bits.items() if mask & bit
        )
