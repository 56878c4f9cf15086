"""Append-only record of decoded characters."""

from typing import Iterator, List


FRAGMENTS_LABEL = "Message: "


class Accumulator:
    """Ordered sequence of decoded characters, in the order frames were loaded."""

    def __init__(self):
        self._chars: List[str] = []

    def append(self, char: str) -> None:
        self._chars.append(char)

    def render_plain(self) -> str:
        """The assembled message."""
        return "".join(self._chars)

    def render_fragments(self) -> str:
        """The message with every character bracketed, e.g. ``Message: [H][I]``."""
        return FRAGMENTS_LABEL + "".join(f"[{c}]" for c in self._chars)

    def __len__(self) -> int:
        return len(self._chars)

    def __iter__(self) -> Iterator[str]:
        return iter(self._chars)
