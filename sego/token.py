"""
Token record shared by the dictionary and the segmenter.
"""

from dataclasses import dataclass, field
from typing import List

from sego.settings import (
    UNKNOWN_TOKEN_COST, UNKNOWN_TOKEN_FREQUENCY, UNKNOWN_TOKEN_POS,
)


@dataclass
class Token:
    """
    A dictionary word.

    cost is -log2 of the word's unigram probability. It is only meaningful
    once the owning Dictionary has been finalized.
    """
    units: List[str]
    frequency: int
    pos: str = ""
    cost: float = 0.0
    known: bool = field(default=True, compare=False)

    def __len__(self) -> int:
        return len(self.units)

    def text(self) -> str:
        """Concatenated text of all units."""
        return "".join(self.units)

    def text_of_phrase(self, joint: str) -> str:
        """Units joined with `joint`."""
        return joint.join(self.units)

    def render(self, joint: str = "") -> str:
        """Plain text when `joint` is empty, otherwise text_of_phrase(joint)."""
        if joint:
            return self.text_of_phrase(joint)
        return self.text()


def unknown_token(unit: str) -> Token:
    """Pseudo-token for a unit with no usable dictionary match."""
    return Token(
        units=[unit],
        frequency=UNKNOWN_TOKEN_FREQUENCY,
        pos=UNKNOWN_TOKEN_POS,
        cost=UNKNOWN_TOKEN_COST,
        known=False,
    )
