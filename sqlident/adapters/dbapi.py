"""Driver for DB-API 2.0 (PEP 249) connections.

The connection provides compilation and execution; identifier quoting comes
from the sqlglot dialect named when the driver is created.
"""

import contextlib
from typing import TYPE_CHECKING, Any, Optional

import sqlglot

from sqlident.quoting import get_quoting_metadata
from sqlident.utils.logging import get_logger

if TYPE_CHECKING:
    from sqlglot.dialects.dialect import DialectType

    from sqlident.quoting import QuotingMetadata
    from sqlident.validation import IdentifierPolicy

__all__ = ("DBAPICursor", "DBAPIDriver", "DBAPIResult", "DBAPIStatement")

logger = get_logger("adapters.dbapi")


class DBAPICursor:
    """Context manager for DB-API cursor management."""

    def __init__(self, connection: Any) -> None:
        self.connection = connection
        self.cursor: Optional[Any] = None

    def __enter__(self) -> Any:
        self.cursor = self.connection.cursor()
        return self.cursor

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        if self.cursor is not None:
            with contextlib.suppress(Exception):
                self.cursor.close()


class DBAPIResult:
    """Rows and row count captured from one execution."""

    __slots__ = ("column_names", "rowcount", "rows")

    def __init__(self, rows: "list[Any]", column_names: "list[str]", rowcount: int) -> None:
        self.rows = rows
        self.column_names = column_names
        self.rowcount = rowcount

    def __iter__(self) -> Any:
        return iter(self.rows)

    def __len__(self) -> int:
        return len(self.rows)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(rows={len(self.rows)}, column_names={self.column_names!r}, "
            f"rowcount={self.rowcount})"
        )


class DBAPIStatement:
    """SQL text compiled for a DB-API connection, executable many times.

    Each :meth:`execute` runs on a fresh cursor and returns a
    :class:`DBAPIResult` snapshot of what the cursor produced.
    """

    __slots__ = ("connection", "sql")

    def __init__(self, connection: Any, sql: str) -> None:
        self.connection = connection
        self.sql = sql

    def execute(self, parameters: Optional[Any] = None) -> DBAPIResult:
        with DBAPICursor(self.connection) as cursor:
            if parameters is None:
                cursor.execute(self.sql)
            else:
                cursor.execute(self.sql, parameters)
            description = cursor.description
            if description is None:
                return DBAPIResult([], [], _rowcount(cursor))
            rows = list(cursor.fetchall())
            return DBAPIResult(rows, [column[0] for column in description], _rowcount(cursor))

    def __repr__(self) -> str:
        return f"{type(self).__name__}(sql={self.sql!r})"


class DBAPIDriver:
    """Database driver backed by any PEP 249 connection.

    Args:
        connection: An open DB-API connection. The driver does not close it.
        dialect: sqlglot dialect whose identifier quoting applies.
        policy: Identifier policy overriding the dialect default.
        validate_syntax: Parse SQL with sqlglot when compiling, raising
            :class:`sqlglot.errors.ParseError` for invalid statements.
    """

    __slots__ = ("_metadata", "connection", "dialect", "policy", "validate_syntax")

    def __init__(
        self,
        connection: Any,
        dialect: "DialectType",
        *,
        policy: "Optional[IdentifierPolicy]" = None,
        validate_syntax: bool = False,
    ) -> None:
        self.connection = connection
        self.dialect = dialect
        self.policy = policy
        self.validate_syntax = validate_syntax
        self._metadata: "Optional[QuotingMetadata]" = None

    def get_quoting_metadata(self) -> "QuotingMetadata":
        if self._metadata is None:
            self._metadata = get_quoting_metadata(self.dialect, self.policy)
        return self._metadata

    def compile(self, sql: str) -> DBAPIStatement:
        if self.validate_syntax:
            sqlglot.parse(sql, read=self.dialect)
        logger.debug("Compiled statement for %s", self.dialect)
        return DBAPIStatement(self.connection, sql)


def _rowcount(cursor: Any) -> int:
    return cursor.rowcount if hasattr(cursor, "rowcount") else -1
