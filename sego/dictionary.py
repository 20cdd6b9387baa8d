"""
Weighted dictionary for Sego.

Stores dictionary words as unit sequences with frequencies and derives each
word's path cost from the global frequency total. Prefix lookups make one
marisa_trie.Trie prefix search over the window key, so all words starting at a
position are found in a single pass.

The dictionary is built in two steps:
1. insert_or_update() for every entry of a load batch
2. finalize() once, which computes costs and builds the immutable prefix index

After finalize() the dictionary is only read, and can be shared between
threads. Loading another batch means building a new Dictionary.
"""

import math
from typing import Dict, Iterator, List, Optional, Sequence, Tuple

import marisa_trie

from sego.settings import PHRASE_DELIMITER
from sego.token import Token


def units_to_key(units: Sequence[str], phrase: bool = False) -> str:
    """
    Encode a unit sequence as an index key.

    Phrase units are joined with the phrase delimiter so that different
    splits of the same characters map to different keys.
    """
    if phrase:
        return PHRASE_DELIMITER.join(units)
    return "".join(units)


def token_cost(frequency: int, log_total_frequency: float) -> float:
    """-log2(frequency / total), given log2(total)."""
    if frequency <= 0:
        return math.inf
    return log_total_frequency - math.log2(frequency)


class Dictionary:
    """
    Prefix-indexed store of weighted tokens.

    Attributes are exposed read-only through properties; use
    insert_or_update() / add_token() and finalize() to build.
    """

    def __init__(self):
        self._tokens: List[Token] = []
        self._index: Dict[str, int] = {}
        self._trie: Optional[marisa_trie.Trie] = None
        self._max_token_length = 0
        self._total_frequency = 0
        self._finalized = False

    def __len__(self) -> int:
        return len(self._tokens)

    def __contains__(self, key: str) -> bool:
        return key in self._index

    def __repr__(self) -> str:
        return (f"Dictionary(num_tokens={self.num_tokens}, "
                f"max_token_length={self._max_token_length}, "
                f"total_frequency={self._total_frequency}, "
                f"finalized={self._finalized})")

    @property
    def num_tokens(self) -> int:
        """Number of distinct tokens."""
        return len(self._tokens)

    @property
    def max_token_length(self) -> int:
        """Unit count of the longest token."""
        return self._max_token_length

    @property
    def total_frequency(self) -> int:
        """Sum of all token frequencies."""
        return self._total_frequency

    @property
    def finalized(self) -> bool:
        return self._finalized

    @property
    def tokens(self) -> Tuple[Token, ...]:
        """All tokens in insertion order."""
        return tuple(self._tokens)

    def get(self, units: Sequence[str], phrase: bool = False) -> Optional[Token]:
        """Get the token for an exact unit sequence, or None."""
        slot = self._index.get(units_to_key(units, phrase))
        if slot is None:
            return None
        return self._tokens[slot]

    # ------------------------------------------------------------------------
    # Building
    # ------------------------------------------------------------------------

    def insert_or_update(self, units: Sequence[str], frequency: int,
                         pos: str = "", phrase: bool = False) -> Token:
        """
        Add a word, or raise the frequency of an existing one.

        An existing word keeps its Token (and pos); its frequency becomes
        max(old, new) and the total grows by the difference. A lower
        frequency is ignored.

        Args:
            units: Unit sequence of the word.
            frequency: Occurrence count.
            pos: Opaque tag.
            phrase: Whether units are phrase-mode units.

        Returns:
            The Token stored for this key.
        """
        return self.add_token(Token(units=list(units), frequency=frequency, pos=pos), phrase)

    def add_token(self, token: Token, phrase: bool = False) -> Token:
        """Add a ready-made Token; same rules as insert_or_update()."""
        key = units_to_key(token.units, phrase)
        slot = self._index.get(key)

        if slot is not None:
            existing = self._tokens[slot]
            if token.frequency > existing.frequency:
                self._total_frequency += token.frequency - existing.frequency
                existing.frequency = token.frequency
                self._finalized = False
            return existing

        self._index[key] = len(self._tokens)
        self._tokens.append(token)
        self._total_frequency += token.frequency
        if len(token.units) > self._max_token_length:
            self._max_token_length = len(token.units)
        self._finalized = False
        return token

    def finalize(self) -> "Dictionary":
        """
        Compute every token's cost and build the prefix index.

        Must run after the whole batch is inserted, since costs depend on
        the final total frequency.

        Returns:
            self, for chaining.
        """
        if self._total_frequency > 0:
            log_total = math.log2(self._total_frequency)
        else:
            log_total = 0.0
        for token in self._tokens:
            token.cost = token_cost(token.frequency, log_total)

        self._trie = marisa_trie.Trie(self._index.keys()) if self._index else None
        self._finalized = True
        return self

    recompute_costs = finalize

    # ------------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------------

    def _walk(self, window: Sequence[str], phrase: bool,
              exclude: Optional[str] = None) -> Iterator[Token]:
        """
        Yield tokens whose units are a prefix of window, shortest first.

        The trie returns every stored key that is a string prefix of the
        window key. Only keys ending on a unit boundary, whose token has
        exactly that many units, are real unit-sequence prefixes: the key
        "'s" of units ["'", "s"] also prefixes the window ["'s"].
        """
        if not self._tokens:
            return
        if not self._finalized:
            raise RuntimeError("Dictionary must be finalized before lookup")
        if not window:
            return

        # key length at the end of each unit -> units consumed
        boundaries: Dict[int, int] = {}
        offset = 0
        for i, unit in enumerate(window):
            if i and phrase:
                offset += len(PHRASE_DELIMITER)
            offset += len(unit)
            boundaries[offset] = i + 1

        for key in self._trie.prefixes(units_to_key(window, phrase)):
            consumed = boundaries.get(len(key))
            if consumed is None:
                continue
            token = self._tokens[self._index[key]]
            if len(token) != consumed:
                continue
            if exclude is not None and token.text() == exclude:
                continue
            yield token

    def lookup_tokens(self, window: Sequence[str], phrase: bool = False) -> List[Token]:
        """
        Find every token whose units are a prefix of window.

        Args:
            window: Units starting at the current position.
            phrase: Whether units are phrase-mode units.

        Returns:
            Matching tokens in increasing length order.
        """
        return list(self._walk(window, phrase))

    def lookup_tokens_except(self, window: Sequence[str], phrase: bool,
                             exclude: str) -> List[Token]:
        """Like lookup_tokens(), skipping tokens whose text equals exclude."""
        return list(self._walk(window, phrase, exclude))
