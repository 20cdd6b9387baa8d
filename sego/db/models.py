"""
SQLAlchemy ORM models for the Sego dictionary store.

Dictionary entries are kept exactly as read from their source files, one row
per line, so a Dictionary can be rebuilt from the database in the same order.
"""

from sqlalchemy import Index, Integer, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    pass


class DictEntry(Base):
    """A dictionary line: word text, frequency and tag, plus where it came from."""
    __tablename__ = "dict_entry"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    text: Mapped[str] = mapped_column(String, nullable=False)
    frequency: Mapped[int] = mapped_column(Integer, nullable=False)
    pos: Mapped[str] = mapped_column(String, nullable=False, default="")
    source: Mapped[str] = mapped_column(String, nullable=False, default="")

    __table_args__ = (
        Index("ix_dict_entry_source", "source"),
    )

    def __repr__(self) -> str:
        return f"DictEntry({self.text!r}, {self.frequency}, {self.pos!r}, source={self.source!r})"
