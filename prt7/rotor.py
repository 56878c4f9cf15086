"""
Rotating substitution rotor.

The rotor is a ring of symbols with a movable head. The symbol under the head
stands for logical 'A', the next one in ring order for 'B', and so on. Ring
order never changes; rotation only moves the head.
"""

import logging
from typing import List

from .protocol import ALPHABET

logger = logging.getLogger(__name__)


class Rotor:
    """
    Circular substitution mapping over a fixed alphabet.

    Backed by a fixed-size list and a head index into it.
    """

    def __init__(self, alphabet: str = ALPHABET):
        self._ring: List[str] = list(alphabet)
        self._head = 0

    @property
    def size(self) -> int:
        return len(self._ring)

    def rotate(self, n: int) -> None:
        """
        Move the head ``n`` positions around the ring.

        The step count is the truncating remainder of ``n`` by the ring size,
        so a negative ``n`` walks backward ``abs(n) % size`` steps.

        Args:
            n: Signed number of positions (positive is forward)
        """
        if self.size == 0:
            return

        steps = abs(n) % self.size
        if steps == 0:
            return
        if n < 0:
            steps = -steps

        self._head = (self._head + steps) % self.size
        logger.debug(f"Rotor rotated {steps:+d}, ring now {self.symbols()}")

    def map(self, char: str) -> str:
        """
        Map a character through the rotor.

        Characters outside 'A'-'Z' are returned unchanged.

        Args:
            char: Single input character

        Returns:
            str: Symbol found ``char - 'A'`` steps forward from the head
        """
        if not ("A" <= char <= "Z") or self.size == 0:
            return char

        position = ord(char) - ord("A")
        return self._ring[(self._head + position) % self.size]

    def head_symbol(self) -> str:
        """Symbol currently representing 'A'."""
        if self.size == 0:
            return "A"
        return self._ring[self._head]

    def symbols(self) -> str:
        """Ring contents in order, starting at the head."""
        return "".join(self._ring[self._head :] + self._ring[: self._head])

    def __repr__(self) -> str:
        return f"Rotor(head={self.head_symbol()!r}, size={self.size})"
