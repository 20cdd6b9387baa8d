"""
Character handling and text splitting for Sego.

Turns raw text into the ordered sequence of atomic units the dictionary and
segmenter work on. A unit is one CJK (or other wide) character, one run of
Latin letters and digits, or, in phrase mode, one hyphen-delimited chunk.

Two granularities are provided:
1. General mode (split_text_to_units): Latin alphanumeric runs are one unit
2. Character mode (split_english_text_to_units): every letter is a unit,
   only digit runs are coalesced
"""

import string
import unicodedata
from enum import Enum
from typing import List, Optional, Union

from sego.settings import PHRASE_DELIMITER

# ============================================================================
# Character Classification
# ============================================================================

# Characters below this codepoint encode in at most two UTF-8 bytes
# (Latin, Greek, Cyrillic, ...). Wider characters are never coalesced.
NARROW_CODEPOINT_LIMIT = 0x800

# Punctuation that does not break a run when surrounded by digits / letters
NUMBER_JOINERS = "./"
LETTER_JOINERS = "'"

_ASCII_LOWER = str.maketrans(string.ascii_uppercase, string.ascii_lowercase)


class UnitKind(Enum):
    """Classification of a single character for splitting purposes."""
    LETTER = "letter"
    DIGIT = "digit"
    OTHER = "other"


def is_letter(char: str) -> bool:
    """Check if a character is a Unicode letter (categories L*)."""
    return unicodedata.category(char).startswith("L")


def is_number(char: str) -> bool:
    """Check if a character is a Unicode number (categories N*)."""
    return unicodedata.category(char).startswith("N")


def is_narrow(char: str) -> bool:
    """Check if a character encodes in at most two UTF-8 bytes."""
    return ord(char) < NARROW_CODEPOINT_LIMIT


def classify_char(char: str) -> UnitKind:
    """
    Classify a character.

    Only narrow characters are letters or digits here; CJK ideographs,
    kana and full-width forms are always OTHER.

    Args:
        char: A single character.

    Returns:
        The UnitKind of the character.
    """
    if not is_narrow(char):
        return UnitKind.OTHER
    if is_letter(char):
        return UnitKind.LETTER
    if is_number(char):
        return UnitKind.DIGIT
    return UnitKind.OTHER


def is_run_joiner(prev: Optional[str], char: str, nxt: Optional[str]) -> bool:
    """
    Check whether punctuation keeps an alphanumeric run together.

    A '.' or '/' between two numbers (3.14, 1/2) or a "'" between two
    letters (don't) does not end the run.
    """
    if prev is None or nxt is None:
        return False
    if char in NUMBER_JOINERS:
        return is_number(prev) and is_number(nxt)
    if char in LETTER_JOINERS:
        return is_letter(prev) and is_letter(nxt)
    return False


def to_lower(text: str) -> str:
    """Lower-case ASCII letters only; other characters are kept as is."""
    return text.translate(_ASCII_LOWER)


def as_text(text: Union[str, bytes]) -> str:
    """Decode UTF-8 bytes to str; invalid sequences become U+FFFD."""
    if isinstance(text, bytes):
        return text.decode("utf-8", errors="replace")
    return text


# ============================================================================
# Text Splitting
# ============================================================================

def split_phrase_units(text: Union[str, bytes]) -> List[str]:
    """
    Split hyphen-delimited text into units.

    Each maximal run of non-hyphen characters is one unit; hyphens are
    dropped.

    Example:
        >>> split_phrase_units("new-york--times")
        ['new', 'york', 'times']
    """
    return [chunk for chunk in as_text(text).split(PHRASE_DELIMITER) if chunk]


def split_text_to_units(text: Union[str, bytes], phrase: bool = False) -> List[str]:
    """
    Split text into units, coalescing Latin alphanumeric runs.

    Args:
        text: UTF-8 bytes or str.
        phrase: If True, split on hyphens instead (see split_phrase_units).

    Returns:
        List of units. Latin runs are ASCII lower-cased.

    Example:
        >>> split_text_to_units("中国Hello 3.14")
        ['中', '国', 'hello', ' ', '3.14']
    """
    if phrase:
        return split_phrase_units(text)

    text = as_text(text)
    units: List[str] = []
    run_start: Optional[int] = None
    prev: Optional[str] = None
    length = len(text)

    for i, char in enumerate(text):
        nxt = text[i + 1] if i + 1 < length else None
        if classify_char(char) is not UnitKind.OTHER or (
                is_narrow(char) and is_run_joiner(prev, char, nxt)):
            if run_start is None:
                run_start = i
        else:
            if run_start is not None:
                units.append(to_lower(text[run_start:i]))
                run_start = None
            units.append(char)
        prev = char

    # Trailing Latin run
    if run_start is not None:
        units.append(to_lower(text[run_start:]))

    return units


def split_english_text_to_units(text: Union[str, bytes], phrase: bool = False) -> List[str]:
    """
    Split text into single-letter units, coalescing only digit runs.

    Used for segmenting Latin text written without spaces, where the
    dictionary recombines letters into words.

    Args:
        text: UTF-8 bytes or str.
        phrase: If True, split on hyphens instead (see split_phrase_units).

    Returns:
        List of units. Letters are not case-folded.

    Example:
        >>> split_english_text_to_units("abc123d")
        ['a', 'b', 'c', '123', 'd']
    """
    if phrase:
        return split_phrase_units(text)

    text = as_text(text)
    units: List[str] = []
    run_start: Optional[int] = None

    for i, char in enumerate(text):
        if classify_char(char) is UnitKind.DIGIT:
            if run_start is None:
                run_start = i
        else:
            if run_start is not None:
                units.append(text[run_start:i])
                run_start = None
            units.append(char)

    if run_start is not None:
        units.append(text[run_start:])

    return units
