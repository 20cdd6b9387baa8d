"""
Tests for the SQLite dictionary store.
"""

from sego.db.connection import dispose_engines, get_session
from sego.db.models import DictEntry
from sego.dict_load import import_dictionary_files, import_entries, iter_db_entries
from sego.segmenter import Segmenter


class TestImportEntries:
    """Tests for storing and reading back entries."""

    def test_round_trip_order(self, db_session):
        count = import_entries(db_session, [("北京", 10, "ns"), ("大学", 8, "n")], source="general")
        assert count == 2
        assert list(iter_db_entries(db_session)) == [("北京", 10, "ns"), ("大学", 8, "n")]

    def test_sources_in_requested_order(self, db_session):
        import_entries(db_session, [("大学", 8, "n")], source="general")
        import_entries(db_session, [("北京", 5, "ns")], source="user")
        entries = list(iter_db_entries(db_session, ["user", "general"]))
        assert entries == [("北京", 5, "ns"), ("大学", 8, "n")]

    def test_rare_entries_filtered(self, db_session):
        import_entries(db_session, [("北京", 1, "ns"), ("大学", 2, "n")])
        assert list(iter_db_entries(db_session)) == [("大学", 2, "n")]

    def test_source_column(self, db_session):
        import_entries(db_session, [("北京", 10, "ns")], source="user")
        row = db_session.query(DictEntry).one()
        assert row.source == "user"
        assert "北京" in repr(row)


class TestDatabaseFiles:
    """Tests with a database file on disk."""

    def test_import_files_and_load(self, tmp_path, write_dict_file):
        user = write_dict_file("user.txt", ["纽约时报 100 nt"])
        general = write_dict_file("general.txt", ["纽约 10 ns", "时报 10 n", "坏"])
        db_path = tmp_path / "sego.db"

        try:
            with get_session(db_path) as session:
                assert import_dictionary_files(session, [user, general]) == 3
                sources = {row.source for row in session.query(DictEntry)}
                assert sources == {"user", "general"}

            assert db_path.exists()

            with get_session(db_path) as session:
                segmenter = Segmenter()
                segmenter.load_database(session)
            assert segmenter.segment("纽约时报") == ["纽约时报"]
            assert segmenter.segment_exclude("纽约时报", "", "纽约时报") == ["纽约", "时报"]
        finally:
            dispose_engines()
