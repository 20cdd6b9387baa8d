"""
Sego: dictionary-based word segmenter.

Splits unsegmented text (mainly Chinese, also Latin text written without
spaces) into dictionary words, choosing the most probable segmentation over
the whole input.
"""

from typing import List, Union

__version__ = "0.1.0"


def load(files: Union[str, list], phrase: bool = False, english: bool = False):
    """
    Create a Segmenter from dictionary files.

    Args:
        files: Dictionary files, as a list or comma-separated string.
        phrase: Hyphen-delimited phrase mode.
        english: Load for letter-by-letter segmentation.

    Returns:
        A loaded Segmenter.

    Example:
        >>> import sego
        >>> segmenter = sego.load("data/dictionary.txt")
        >>> segmenter.segment("中华人民共和国")
    """
    from sego.segmenter import Segmenter

    segmenter = Segmenter(phrase=phrase)
    if english:
        segmenter.load_english_dictionary(files)
    else:
        segmenter.load_dictionary(files)
    return segmenter


def segment(
    text: Union[str, bytes],
    segmenter=None,
    joint: str = "",
    exclude: str = "",
) -> List[str]:
    """
    Segment text into words.

    Args:
        text: Text to segment.
        segmenter: Loaded Segmenter. If None, one is loaded from the
            SEGO_DICT_PATH files.
        joint: Joiner for units inside phrase words.
        exclude: Dictionary word to avoid.

    Returns:
        List of words.
    """
    if segmenter is None:
        segmenter = _default_segmenter()
    if exclude:
        return segmenter.segment_exclude(text, joint, exclude)
    return segmenter.segment(text, joint)


_DEFAULT_SEGMENTER = None


def _default_segmenter():
    global _DEFAULT_SEGMENTER
    if _DEFAULT_SEGMENTER is None:
        from sego.settings import DICT_PATH
        if not DICT_PATH:
            raise RuntimeError("No dictionary configured; set SEGO_DICT_PATH or pass a segmenter")
        _DEFAULT_SEGMENTER = load(DICT_PATH)
    return _DEFAULT_SEGMENTER
