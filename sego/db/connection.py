"""
Database connection management for Sego.

SQLite through SQLAlchemy. Engines are cached per database path; sessions
are created fresh for each caller.
"""

import threading
from pathlib import Path
from typing import Dict, Optional, Union

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session

from sego.db.models import Base
from sego.settings import DB_PATH

MEMORY_DB = ":memory:"

_engines: Dict[str, Engine] = {}
_engines_lock = threading.Lock()


def get_db_path() -> Optional[str]:
    """
    Get the configured database path.

    Returns:
        SEGO_DB_PATH (or the default data/sego.db) if the file exists,
        otherwise None.
    """
    if DB_PATH.exists():
        return str(DB_PATH)
    return None


def get_engine(db_path: Union[str, Path, None] = None) -> Engine:
    """
    Get (or create) the engine for a database file.

    Args:
        db_path: SQLite file path, or ":memory:". Defaults to settings.DB_PATH.
    """
    path = str(db_path) if db_path is not None else str(DB_PATH)

    with _engines_lock:
        engine = _engines.get(path)
        if engine is None:
            if path == MEMORY_DB:
                engine = create_engine("sqlite://")
            else:
                Path(path).parent.mkdir(parents=True, exist_ok=True)
                engine = create_engine(f"sqlite:///{path}")
            _engines[path] = engine
    return engine


def init_db(engine: Engine):
    """Create the dictionary tables if they don't exist."""
    Base.metadata.create_all(engine)


def get_session(db_path: Union[str, Path, None] = None) -> Session:
    """
    Open a session on the dictionary database, creating tables as needed.

    Args:
        db_path: SQLite file path, or ":memory:". Defaults to settings.DB_PATH.

    Returns:
        A new Session; close it (or use it as a context manager) when done.
    """
    engine = get_engine(db_path)
    init_db(engine)
    return Session(engine)


def dispose_engines():
    """Dispose and forget all cached engines."""
    with _engines_lock:
        for engine in _engines.values():
            engine.dispose()
        _engines.clear()
