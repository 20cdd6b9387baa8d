"""
Settings and configuration for Sego.

Module-level constants, with environment variable overrides for paths and
debug output.
"""

import os
from pathlib import Path

# Data directory paths
PACKAGE_DIR = Path(__file__).parent
DATA_DIR = PACKAGE_DIR / "data"

# Database path - defaults to data/sego.db
DEFAULT_DB_PATH = DATA_DIR / "sego.db"

# Environment variable for custom database path
DB_PATH = Path(os.environ.get("SEGO_DB_PATH", DEFAULT_DB_PATH))

# Dictionary text files, comma-separated, loaded in order (user dictionaries first)
DICT_PATH = os.environ.get("SEGO_DICT_PATH", "")

# Debug mode
DEBUG = os.environ.get("SEGO_DEBUG", "").lower() in ("1", "true", "yes")

# Only dictionary entries with at least this frequency are loaded
MIN_TOKEN_FREQUENCY = 2

# Pseudo-token synthesized for a unit with no single-unit dictionary match
UNKNOWN_TOKEN_COST = 32.0
UNKNOWN_TOKEN_FREQUENCY = 1
UNKNOWN_TOKEN_POS = "x"

# Separator between units in phrase mode (input text and index keys)
PHRASE_DELIMITER = "-"

