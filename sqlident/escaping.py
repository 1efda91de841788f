"""Identifier escaping."""

from collections.abc import Iterable
from typing import TYPE_CHECKING

from sqlident.exceptions import EmptyIdentifierListError
from sqlident.validation import validate_identifier

if TYPE_CHECKING:
    from sqlident.quoting import QuotingMetadata

__all__ = ("escape_identifier", "escape_identifier_list", "quote_identifier", "quote_identifier_list")

IDENTIFIER_LIST_SEPARATOR = ", "


def escape_identifier(value: str, metadata: "QuotingMetadata") -> str:
    """Wrap an already validated identifier in the dialect's quotes.

    Examples:
        >>> from sqlident.quoting import get_quoting_metadata
        >>> escape_identifier("name", get_quoting_metadata("postgres"))
        '"name"'
        >>> escape_identifier("order", get_quoting_metadata("tsql"))
        '[order]'
    """
    escaped = value.replace(metadata.quote_end, metadata.escaped_quote_end)
    return f"{metadata.quote_start}{escaped}{metadata.quote_end}"


def escape_identifier_list(values: "Iterable[str]", metadata: "QuotingMetadata") -> str:
    """Escape each identifier and join them into a comma separated list.

    Raises:
        EmptyIdentifierListError: If ``values`` is empty.
    """
    escaped = [escape_identifier(value, metadata) for value in values]
    if not escaped:
        raise EmptyIdentifierListError
    return IDENTIFIER_LIST_SEPARATOR.join(escaped)


def quote_identifier(value: object, metadata: "QuotingMetadata") -> str:
    """Validate then escape a single identifier."""
    return escape_identifier(validate_identifier(value, metadata), metadata)


def quote_identifier_list(values: "Iterable[object]", metadata: "QuotingMetadata") -> str:
    """Validate then escape every identifier, joined with ``", "``."""
    if isinstance(values, str):
        msg = "Expected an iterable of identifiers, got a single str"
        raise TypeError(msg)
    return escape_identifier_list([validate_identifier(value, metadata) for value in values], metadata)
