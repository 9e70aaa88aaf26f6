"""
Unit tests for the events table DDL across dialects.
"""

from sqlalchemy.dialects import mysql, postgresql, sqlite
from sqlalchemy.schema import CreateTable

from event_tracker.models.events import Event


def ddl(dialect):
    return str(CreateTable(Event.__table__).compile(dialect=dialect))


class TestJSONDocument:
    """Tests for the data column type."""

    def test_postgresql_uses_json_column(self):
        assert "data JSON" in ddl(postgresql.dialect())

    def test_mysql_uses_json_column(self):
        assert "data JSON" in ddl(mysql.dialect())

    def test_sqlite_falls_back_to_text(self):
        assert "data TEXT" in ddl(sqlite.dialect())

    def test_string_columns_are_bounded(self):
        statement = ddl(postgresql.dialect())
        assert "source VARCHAR(255)" in statement
        assert "event_type VARCHAR(255)" in statement
