"""
Shortest-path segmentation for Sego.

Every unit position of the input is a node of an implicit DAG. Each
dictionary word starting at position i with k units is an edge i -> i+k
weighted by the word's cost. The segmentation is the minimum-cost path from
0 to n, found with a single left-to-right pass (positions are already in
topological order) followed by a walk back along the recorded jumpers.

The Segmenter class owns a finalized Dictionary and wraps loading and
segmentation behind one object.
"""

import logging
import threading
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Sequence, Tuple, Union

from sego.characters import split_english_text_to_units, split_text_to_units
from sego.dict_load import (
    build_dictionary, iter_db_entries, iter_dictionary_files, iter_preload_entries,
)
from sego.dictionary import Dictionary
from sego.token import Token, unknown_token

logger = logging.getLogger(__name__)


# ============================================================================
# Path Search
# ============================================================================

@dataclass
class Jumper:
    """Best way found so far to reach a position."""
    min_cost: Optional[float] = None
    token: Optional[Token] = None

    def update(self, base_cost: float, token: Token):
        """Take token if it gives a strictly cheaper path (ties keep the first)."""
        new_cost = base_cost + token.cost
        if self.min_cost is None or new_cost < self.min_cost:
            self.min_cost = new_cost
            self.token = token


def segment_units(
    dictionary: Dictionary,
    units: Sequence[str],
    search_mode: bool = False,
    exclude: str = "",
    phrase: bool = False,
) -> List[Token]:
    """
    Find the minimum-cost segmentation of a unit sequence.

    Args:
        dictionary: A finalized Dictionary.
        units: Units to segment.
        search_mode: Re-segmentation of a single word: a one-unit sequence
            gives no result, and the word spanning all units is not used.
        exclude: If set, dictionary words with this text are ignored
            everywhere.
        phrase: Whether units are phrase-mode units.

    Returns:
        Tokens covering units in order. Positions without a single-unit
        dictionary word also get an unknown pseudo-token, so every input
        has a full segmentation.
    """
    n = len(units)
    if n == 0 or (search_mode and n == 1):
        return []

    # jumpers[i] describes the best path ending just before units[i]
    jumpers = [Jumper() for _ in range(n + 1)]
    jumpers[0].min_cost = 0.0
    max_length = dictionary.max_token_length

    for current in range(n):
        base_cost = jumpers[current].min_cost
        window = units[current:min(current + max_length, n)]

        if exclude:
            tokens = dictionary.lookup_tokens_except(window, phrase, exclude)
        else:
            tokens = dictionary.lookup_tokens(window, phrase)

        for token in tokens:
            end = current + len(token)
            if not search_mode or current != 0 or end != n:
                jumpers[end].update(base_cost, token)

        # Keep the next position reachable
        if not tokens or len(tokens[0]) > 1:
            jumpers[current + 1].update(base_cost, unknown_token(units[current]))

    segments: List[Token] = []
    end = n
    while end > 0:
        token = jumpers[end].token
        segments.append(token)
        end -= len(token)
    segments.reverse()
    return segments


def render_tokens(tokens: Iterable[Token], joint: str = "") -> List[str]:
    """Render tokens as text, joining phrase units with joint if given."""
    return [token.render(joint) for token in tokens]


def path_cost(tokens: Iterable[Token]) -> float:
    """Total cost of a segmentation."""
    return sum(token.cost for token in tokens)


# ============================================================================
# Segmenter
# ============================================================================

class Segmenter:
    """
    Dictionary-backed word segmenter.

    Loading builds a new Dictionary and swaps it in once it is finalized;
    segmentation only reads the current one, so a Segmenter can be shared
    between threads.

    Example:
        >>> seg = Segmenter()
        >>> seg.load_dictionary("user.txt,dictionary.txt")
        >>> seg.segment("中华人民共和国")
        ['中华人民共和国']
    """

    def __init__(self, phrase: bool = False, dictionary: Optional[Dictionary] = None):
        self.phrase = phrase
        self._dict = dictionary if dictionary is not None else Dictionary()
        self._load_lock = threading.Lock()

    @property
    def dictionary(self) -> Dictionary:
        """The dictionary currently used for segmentation."""
        return self._dict

    # ------------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------------

    def _load(self, entries: Iterable[Tuple[str, int, str]], english: bool = False) -> Dictionary:
        with self._load_lock:
            dictionary = build_dictionary(entries, phrase=self.phrase, english=english)
            self._dict = dictionary
        logger.debug(f"Published {dictionary!r}")
        return dictionary

    def load_dictionary(self, files: Union[str, Sequence]) -> Dictionary:
        """
        Load dictionary text files.

        Args:
            files: Paths as a list or a comma-separated string. Earlier
                files are loaded first, so a user dictionary listed before
                the general one wins when frequencies tie.

        Returns:
            The new, finalized Dictionary.
        """
        return self._load(iter_dictionary_files(files))

    def load_english_dictionary(self, files: Union[str, Sequence]) -> Dictionary:
        """Load dictionary files for character-granularity (English) segmentation."""
        return self._load(iter_dictionary_files(files), english=True)

    def load_preload_dictionary(self, pre_dict: Dict[str, str]) -> Dictionary:
        """
        Load an in-memory dictionary.

        Args:
            pre_dict: Mapping of word -> dictionary line ("word freq [pos]").
                The key supplies the word text.
        """
        return self._load(iter_preload_entries(pre_dict))

    def load_entries(self, entries: Iterable[Tuple[str, int, str]],
                     english: bool = False) -> Dictionary:
        """Load (text, frequency, pos) triples that are already filtered."""
        return self._load(entries, english=english)

    def load_database(self, session, sources: Optional[Sequence[str]] = None,
                      english: bool = False) -> Dictionary:
        """
        Load dictionary entries stored in the SQLite database.

        Args:
            session: SQLAlchemy session.
            sources: Restrict to these sources, loaded in the given order.
            english: Build for character-granularity segmentation.
        """
        return self._load(iter_db_entries(session, sources), english=english)

    # ------------------------------------------------------------------------
    # Segmentation
    # ------------------------------------------------------------------------

    def segment_tokens(
        self,
        text: Union[str, bytes],
        exclude: str = "",
        english: bool = False,
        search_mode: bool = False,
    ) -> List[Token]:
        """
        Segment text into Tokens.

        Args:
            text: UTF-8 bytes or str.
            exclude: Dictionary word to ignore (forces another split).
            english: Split letters individually (character granularity).
            search_mode: See segment_units().
        """
        return self._segment_with(self._dict, text, exclude, english, search_mode)

    def _segment_with(self, dictionary: Dictionary, text: Union[str, bytes],
                      exclude: str = "", english: bool = False,
                      search_mode: bool = False) -> List[Token]:
        if not text:
            return []

        if english:
            units = split_english_text_to_units(text, self.phrase)
        else:
            units = split_text_to_units(text, self.phrase)

        return segment_units(dictionary, units, search_mode=search_mode,
                             exclude=exclude, phrase=self.phrase)

    def segment(self, text: Union[str, bytes], joint: str = "") -> List[str]:
        """
        Segment text into words.

        Args:
            text: UTF-8 bytes or str.
            joint: If set, units inside each word are joined with it.

        Returns:
            List of words.
        """
        return render_tokens(self.segment_tokens(text), joint)

    def segment_exclude(self, text: Union[str, bytes], joint: str, exclude: str) -> List[str]:
        """Segment text, never producing the dictionary word `exclude`."""
        return render_tokens(self.segment_tokens(text, exclude=exclude), joint)

    def segment_english(self, text: Union[str, bytes], joint: str = "") -> List[str]:
        """Segment Latin text letter by letter against an English dictionary."""
        return render_tokens(self.segment_tokens(text, english=True), joint)

    def segment_for_search(self, text: Union[str, bytes], joint: str = "",
                           english: bool = False) -> List[str]:
        """
        Segment text for search indexing.

        Each multi-unit word is preceded by the dictionary words found when
        re-segmenting it (recursively), e.g. 纽约时报 gives 纽约, 时报, 纽约时报.
        """
        dictionary = self._dict
        output: List[Token] = []
        for token in self._segment_with(dictionary, text, english=english):
            output.extend(self._search_tokens(dictionary, token))
        return render_tokens(output, joint)

    def _search_tokens(self, dictionary: Dictionary, token: Token) -> List[Token]:
        result: List[Token] = []
        if len(token) > 1:
            for sub in segment_units(dictionary, token.units, search_mode=True,
                                     phrase=self.phrase):
                if sub.known:
                    result.extend(self._search_tokens(dictionary, sub))
        result.append(token)
        return result
