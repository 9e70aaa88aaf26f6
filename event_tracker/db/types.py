"""
Custom SQLAlchemy types for database compatibility.
"""

from sqlalchemy import Text, TypeDecorator
from sqlalchemy.types import UserDefinedType


class _JSONColumn(UserDefinedType):
    """Declares a native JSON column without any driver-side (de)serialization."""

    cache_ok = True

    def get_col_spec(self, **kw):
        return "JSON"


class JSONDocument(TypeDecorator):
    """
    JSON-typed column that is written and read as JSON text.

    Uses the native JSON column type where the database has one (PostgreSQL,
    MySQL), otherwise falls back to TEXT. Values are bound as already
    serialized strings; parsing the stored text back is left to the caller
    so that a broken document can be handled per row.
    """

    impl = Text
    cache_ok = True

    def load_dialect_impl(self, dialect):
        if dialect.name in ("postgresql", "mysql", "mariadb"):
            return dialect.type_descriptor(_JSONColumn())
        else:
            return dialect.type_descriptor(Text())

    def process_result_value(self, value, dialect):
        if isinstance(value, bytes):
            return value.decode("utf-8")
        return value
