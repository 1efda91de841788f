"""Identifier quoting metadata.

Quote characters come from the sqlglot dialect definitions, so any dialect
sqlglot knows can be targeted. Resolution fails loudly: there is no fallback
quoting style.
"""

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING, Final, Optional

from sqlglot.dialects.dialect import Dialect

from sqlident.exceptions import MetadataUnavailableError
from sqlident.utils.logging import get_logger, log_event
from sqlident.validation import IdentifierPolicy

if TYPE_CHECKING:
    from sqlglot.dialects.dialect import DialectType

__all__ = (
    "BACKSLASH_ESCAPE_DIALECTS",
    "BYTE_LENGTH_DIALECTS",
    "IDENTIFIER_MAX_LENGTHS",
    "QuotingMetadata",
    "default_policy",
    "get_quoting_metadata",
)

logger = get_logger("quoting")

# Documented identifier length limits. Dialects in BYTE_LENGTH_DIALECTS count
# UTF-8 bytes, the others count characters.
IDENTIFIER_MAX_LENGTHS: Final["dict[str, int]"] = {
    "bigquery": 1024,
    "clickhouse": 255,
    "databricks": 255,
    "duckdb": 255,
    "mysql": 64,
    "oracle": 128,
    "postgres": 63,
    "redshift": 127,
    "snowflake": 255,
    "spark": 255,
    "tsql": 128,
}

# postgres truncates past NAMEDATALEN - 1 bytes.
BYTE_LENGTH_DIALECTS: Final = frozenset({"oracle", "postgres", "redshift"})

# Quoted identifiers in these dialects honour backslash escapes, whatever the
# installed sqlglot tokenizer declares.
BACKSLASH_ESCAPE_DIALECTS: Final = frozenset({"bigquery", "clickhouse"})


class QuotingMetadata:
    """How identifiers are delimited for one dialect.

    An embedded ``quote_end`` is escaped by doubling it. ``escape_chars`` holds
    any other character the dialect reads as an escape inside a quoted
    identifier, such as the backslash of ClickHouse and BigQuery. Doubling
    cannot neutralise those, so the validator refuses them outright.
    """

    __slots__ = ("dialect", "escape_chars", "policy", "quote_end", "quote_start")

    def __init__(
        self,
        dialect: str,
        quote_start: str,
        quote_end: str,
        policy: "Optional[IdentifierPolicy]" = None,
        escape_chars: "Iterable[str]" = (),
    ) -> None:
        if not quote_start or not quote_end:
            msg = "Dialect does not define identifier quote characters."
            raise MetadataUnavailableError(msg, dialect=dialect)
        object.__setattr__(self, "dialect", dialect)
        object.__setattr__(self, "quote_start", quote_start)
        object.__setattr__(self, "quote_end", quote_end)
        object.__setattr__(self, "policy", policy if policy is not None else default_policy(dialect))
        object.__setattr__(self, "escape_chars", frozenset(escape_chars) - {quote_end})

    def __setattr__(self, name: str, value: object) -> None:
        msg = f"{type(self).__name__} is immutable"
        raise AttributeError(msg)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, QuotingMetadata):
            return NotImplemented
        return (
            self.dialect == other.dialect
            and self.quote_start == other.quote_start
            and self.quote_end == other.quote_end
            and self.policy == other.policy
            and self.escape_chars == other.escape_chars
        )

    def __hash__(self) -> int:
        return hash((self.dialect, self.quote_start, self.quote_end, self.policy, self.escape_chars))

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(dialect={self.dialect!r}, quote_start={self.quote_start!r}, "
            f"quote_end={self.quote_end!r}, policy={self.policy!r}, escape_chars={sorted(self.escape_chars)!r})"
        )

    @property
    def escaped_quote_end(self) -> str:
        return self.quote_end * 2


def default_policy(dialect: str) -> IdentifierPolicy:
    """Identifier policy used when a driver does not supply one."""
    return IdentifierPolicy(
        max_length=IDENTIFIER_MAX_LENGTHS.get(dialect), length_in_bytes=dialect in BYTE_LENGTH_DIALECTS
    )


def get_quoting_metadata(dialect: "DialectType", policy: "Optional[IdentifierPolicy]" = None) -> QuotingMetadata:
    """Resolve quoting metadata for a sqlglot dialect.

    Besides the quote characters, the tokenizer's ``IDENTIFIER_ESCAPES`` are
    recorded so that escape characters other than the closing quote are never
    accepted in an identifier.

    Args:
        dialect: Dialect name, class or instance understood by sqlglot.
        policy: Identifier policy overriding the dialect default.

    Raises:
        MetadataUnavailableError: If no dialect is given, sqlglot does not
            know it, or it has no identifier quoting.

    Returns:
        The dialect's quoting metadata.
    """
    if dialect is None or dialect == "":
        msg = "A dialect is required to quote identifiers."
        raise MetadataUnavailableError(msg)
    try:
        resolved = Dialect.get_or_raise(dialect)
    except ValueError as e:
        msg = f"Unknown dialect: {e}"
        raise MetadataUnavailableError(msg, dialect=str(dialect)) from e

    name = _dialect_name(resolved)
    escape_chars = set(getattr(resolved.tokenizer_class, "IDENTIFIER_ESCAPES", ()))
    if name in BACKSLASH_ESCAPE_DIALECTS:
        escape_chars.add("\\")
    metadata = QuotingMetadata(
        name,
        getattr(resolved, "IDENTIFIER_START", ""),
        getattr(resolved, "IDENTIFIER_END", ""),
        policy,
        escape_chars,
    )
    log_event(
        logger,
        logging.DEBUG,
        "Resolved identifier quoting for %s",
        name,
        dialect=name,
        quote_start=metadata.quote_start,
        quote_end=metadata.quote_end,
        escape_chars=sorted(metadata.escape_chars),
    )
    return metadata


def _dialect_name(dialect: Dialect) -> str:
    for name, klass in Dialect.classes.items():
        if type(dialect) is klass:
            return name
    return type(dialect).__name__.lower()
