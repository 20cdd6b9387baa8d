"""
Shared fixtures for sego tests.
"""

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import Session

from sego.db.connection import init_db
from sego.dict_load import build_dictionary
from sego.segmenter import Segmenter


# Scenario dictionaries. Totals are powers of two so costs are exact.
BEIJING_ENTRIES = [
    ("去", 16, "v"),
    ("北京", 16, "ns"),
    ("北京大学", 8, "nt"),
    ("大学", 24, "n"),
]

NEW_YORK_TIMES_ENTRIES = [
    ("纽约时报", 100, "nt"),
    ("纽约", 10, "ns"),
    ("时报", 10, "n"),
]

ENGLISH_ENTRIES = [
    ("i", 10, "r"),
    ("love", 10, "v"),
    ("you", 10, "r"),
]


@pytest.fixture
def make_segmenter():
    """Factory: Segmenter loaded from (text, frequency, pos) triples."""
    def _make(entries, phrase=False, english=False):
        segmenter = Segmenter(phrase=phrase)
        segmenter.load_entries(entries, english=english)
        return segmenter
    return _make


@pytest.fixture
def beijing_dictionary():
    return build_dictionary(BEIJING_ENTRIES)


@pytest.fixture
def write_dict_file(tmp_path):
    """Factory: write dictionary lines to a file under tmp_path."""
    def _write(name, lines):
        path = tmp_path / name
        path.write_text("\n".join(lines) + "\n", encoding="utf-8")
        return path
    return _write


@pytest.fixture
def db_session():
    """Session on a private in-memory database."""
    engine = create_engine("sqlite://")
    init_db(engine)
    with Session(engine) as session:
        yield session
    engine.dispose()
