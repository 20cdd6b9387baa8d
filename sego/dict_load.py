"""
Dictionary loading module for Sego.

Reads dictionary entries from text files, in-memory mappings or the SQLite
store, and builds finalized Dictionary objects from them.

Dictionary text format, one entry per line:
    text frequency [pos]

Lines with fewer than two fields, a non-integer frequency or a frequency
below MIN_TOKEN_FREQUENCY are skipped. Blank lines and '#' comments are
ignored.
"""

import itertools
import logging
from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Optional, Sequence, Tuple, Union

from sqlalchemy import select
from sqlalchemy.orm import Session

from sego.characters import split_english_text_to_units, split_text_to_units
from sego.db.models import DictEntry
from sego.dictionary import Dictionary
from sego.settings import MIN_TOKEN_FREQUENCY

logger = logging.getLogger(__name__)

Entry = Tuple[str, int, str]


# ============================================================================
# Parsing
# ============================================================================

def parse_dictionary_line(line: str) -> Optional[Entry]:
    """
    Parse one dictionary line.

    Args:
        line: "text frequency [pos]"; fields beyond the third are ignored.

    Returns:
        (text, frequency, pos) tuple, or None if the line is malformed.
        pos is "" when missing.
    """
    fields = line.split()
    if len(fields) < 2:
        return None
    try:
        frequency = int(fields[1])
    except ValueError:
        return None
    pos = fields[2] if len(fields) > 2 else ""
    return fields[0], frequency, pos


def is_frequent_enough(frequency: int) -> bool:
    return frequency >= MIN_TOKEN_FREQUENCY


# ============================================================================
# Entry Sources
# ============================================================================

def split_dictionary_files(files: Union[str, Path, Sequence]) -> List[Path]:
    """
    Normalize a dictionary file list.

    Args:
        files: A comma-separated string ("user.txt,dictionary.txt"), a single
            Path, or a sequence of paths.

    Returns:
        Paths in load order.
    """
    if isinstance(files, Path):
        return [files]
    if isinstance(files, str):
        return [Path(name.strip()) for name in files.split(",") if name.strip()]
    return [Path(name) for name in files]


def iter_dictionary_file(path: Union[str, Path]) -> Iterator[Entry]:
    """
    Read entries from one dictionary text file.

    Args:
        path: UTF-8 dictionary file.

    Yields:
        (text, frequency, pos) for every valid, frequent-enough line.
    """
    path = Path(path)
    logger.info(f"loading sego dictionary {path}")

    loaded = 0
    skipped = 0
    with open(path, encoding="utf-8") as f:
        for line_no, line in enumerate(f, 1):
            stripped = line.strip()
            if not stripped or stripped.startswith("#"):
                continue

            entry = parse_dictionary_line(stripped)
            if entry is None:
                logger.debug(f"{path}:{line_no}: malformed entry skipped: {stripped!r}")
                skipped += 1
                continue
            if not is_frequent_enough(entry[1]):
                logger.debug(f"{path}:{line_no}: frequency {entry[1]} too low, skipped")
                skipped += 1
                continue

            loaded += 1
            yield entry

    logger.info(f"{path}: {loaded} entries read, {skipped} skipped")


def iter_dictionary_files(files: Union[str, Path, Sequence]) -> Iterator[Entry]:
    """
    Read entries from several dictionary files, in order.

    Raises:
        FileNotFoundError: If any of the files is missing (checked before
            anything is read).
    """
    paths = split_dictionary_files(files)
    for path in paths:
        if not path.is_file():
            raise FileNotFoundError(f"cannot load sego dictionary \"{path}\"")
    return itertools.chain.from_iterable(iter_dictionary_file(p) for p in paths)


def iter_preload_entries(pre_dict: Dict[str, str]) -> Iterator[Entry]:
    """
    Read entries from an in-memory mapping.

    Args:
        pre_dict: word -> dictionary line. Only the frequency and pos fields
            of the line are used; the key is the word text.
    """
    for word, line in pre_dict.items():
        entry = parse_dictionary_line(line)
        if entry is None:
            logger.debug(f"malformed preload entry for {word!r} skipped: {line!r}")
            continue
        _, frequency, pos = entry
        if not is_frequent_enough(frequency):
            continue
        yield word, frequency, pos


def iter_db_entries(session: Session, sources: Optional[Sequence[str]] = None) -> Iterator[Entry]:
    """
    Read entries from the SQLite store in import order.

    Args:
        session: Database session.
        sources: If given, only these sources, one after another in this order.
    """
    if sources is None:
        statements = [select(DictEntry).order_by(DictEntry.id)]
    else:
        statements = [
            select(DictEntry).where(DictEntry.source == source).order_by(DictEntry.id)
            for source in sources
        ]

    for stmt in statements:
        stmt = stmt.where(DictEntry.frequency >= MIN_TOKEN_FREQUENCY)
        for row in session.execute(stmt).scalars():
            yield row.text, row.frequency, row.pos


# ============================================================================
# Building
# ============================================================================

def entry_units(text: str, phrase: bool = False, english: bool = False) -> List[str]:
    """Split an entry's text the way matching input text will be split."""
    if english:
        return split_english_text_to_units(text.lower(), phrase)
    return split_text_to_units(text, phrase)


def build_dictionary(entries: Iterable[Entry], phrase: bool = False,
                     english: bool = False) -> Dictionary:
    """
    Build and finalize a Dictionary.

    Entries are inserted as given (no frequency filtering here). When the
    same word appears more than once the highest frequency is kept.

    Args:
        entries: (text, frequency, pos) triples.
        phrase: Split entry text in phrase mode.
        english: Lower-case entry text and split letter by letter.

    Returns:
        The finalized Dictionary.
    """
    dictionary = Dictionary()
    for text, frequency, pos in entries:
        units = entry_units(text, phrase, english)
        if not units:
            logger.debug(f"entry {text!r} has no units, skipped")
            continue
        dictionary.insert_or_update(units, frequency, pos, phrase)

    dictionary.finalize()
    logger.info(
        f"sego dictionary loading complete: {dictionary.num_tokens} tokens, "
        f"total frequency {dictionary.total_frequency}"
    )
    return dictionary


# ============================================================================
# Database Import
# ============================================================================

def import_entries(session: Session, entries: Iterable[Entry], source: str = "") -> int:
    """
    Store entries in the database.

    Args:
        session: Database session (committed on success).
        entries: (text, frequency, pos) triples.
        source: Label for the entries, e.g. the dictionary file name.

    Returns:
        Number of entries stored.
    """
    rows = [
        DictEntry(text=text, frequency=frequency, pos=pos, source=source)
        for text, frequency, pos in entries
    ]
    session.add_all(rows)
    session.commit()
    return len(rows)


def import_dictionary_files(session: Session, files: Union[str, Path, Sequence],
                            source: Optional[str] = None) -> int:
    """
    Import dictionary text files into the database.

    Args:
        session: Database session.
        files: Files as for iter_dictionary_files().
        source: Source label for all entries; defaults to each file's stem.

    Returns:
        Total number of entries stored.
    """
    total = 0
    for path in split_dictionary_files(files):
        if not path.is_file():
            raise FileNotFoundError(f"cannot load sego dictionary \"{path}\"")
        count = import_entries(session, iter_dictionary_file(path), source or path.stem)
        logger.info(f"Imported {count} entries from {path}")
        total += count
    return total
