"""Identifier validation.

Every value bound to a template parameter passes through
:func:`validate_identifier` before it is escaped. The rules that differ
between databases live on an :class:`IdentifierPolicy` supplied with the
dialect's quoting metadata.
"""

import re
import unicodedata
from typing import TYPE_CHECKING, Final, Optional, Union

from sqlident.exceptions import InvalidIdentifierError

if TYPE_CHECKING:
    from sqlident.quoting import QuotingMetadata

__all__ = ("STATEMENT_TERMINATORS", "IdentifierPolicy", "validate_identifier")

STATEMENT_TERMINATORS: Final = frozenset(";")


class IdentifierPolicy:
    """Dialect specific identifier rules.

    Args:
        max_length: Longest identifier the database accepts. ``None`` disables
            the check.
        allow_embedded_quotes: Permit the dialect's quote characters inside
            an identifier. They are then escaped by doubling the closing quote.
        pattern: Optional regular expression every identifier must fully match.
        length_in_bytes: Measure ``max_length`` in UTF-8 bytes rather than
            characters, for databases that limit the encoded name.
    """

    __slots__ = ("allow_embedded_quotes", "length_in_bytes", "max_length", "pattern")

    def __init__(
        self,
        max_length: Optional[int] = None,
        allow_embedded_quotes: bool = False,
        pattern: "Optional[Union[str, re.Pattern[str]]]" = None,
        length_in_bytes: bool = False,
    ) -> None:
        if max_length is not None and max_length < 1:
            msg = f"max_length must be positive, got {max_length}"
            raise ValueError(msg)
        self.max_length = max_length
        self.allow_embedded_quotes = allow_embedded_quotes
        self.pattern = re.compile(pattern) if isinstance(pattern, str) else pattern
        self.length_in_bytes = length_in_bytes

    def replace(self, **kwargs: object) -> "IdentifierPolicy":
        """Return a copy with the given attributes replaced."""
        current = {name: getattr(self, name) for name in self.__slots__}
        current.update(kwargs)
        return IdentifierPolicy(**current)  # type: ignore[arg-type]

    def measure(self, value: str) -> int:
        """Length of ``value`` in the unit ``max_length`` is expressed in."""
        return len(value.encode("utf-8")) if self.length_in_bytes else len(value)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, IdentifierPolicy):
            return NotImplemented
        return (
            self.max_length == other.max_length
            and self.allow_embedded_quotes == other.allow_embedded_quotes
            and self.pattern == other.pattern
            and self.length_in_bytes == other.length_in_bytes
        )

    def __hash__(self) -> int:
        return hash((self.max_length, self.allow_embedded_quotes, self.pattern, self.length_in_bytes))

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(max_length={self.max_length!r}, "
            f"allow_embedded_quotes={self.allow_embedded_quotes!r}, pattern={self.pattern!r}, "
            f"length_in_bytes={self.length_in_bytes!r})"
        )


def validate_identifier(value: object, metadata: "QuotingMetadata") -> str:
    """Check that ``value`` can be safely quoted as a single identifier.

    Args:
        value: Raw identifier supplied by the caller, unquoted.
        metadata: Quoting metadata of the target dialect.

    Raises:
        InvalidIdentifierError: If the value is not a string, is empty,
            contains a control character, statement terminator or identifier
            escape character, contains a quote character the policy does not
            allow, is longer than the dialect permits, or does not match the
            policy pattern.

    Returns:
        The validated identifier.
    """
    if not isinstance(value, str):
        raise InvalidIdentifierError(value, f"expected str, got {type(value).__name__}")
    if not value:
        raise InvalidIdentifierError(value, "identifier cannot be empty")

    policy = metadata.policy
    quote_chars = {metadata.quote_start, metadata.quote_end}
    for char in value:
        if unicodedata.category(char) == "Cc":
            raise InvalidIdentifierError(value, f"control character {char!r} is not allowed")
        if char in STATEMENT_TERMINATORS:
            raise InvalidIdentifierError(value, f"statement terminator {char!r} is not allowed")
        if char in metadata.escape_chars:
            raise InvalidIdentifierError(value, f"identifier escape character {char!r} is not allowed")
        if char in quote_chars and not policy.allow_embedded_quotes:
            raise InvalidIdentifierError(value, f"quote character {char!r} is not allowed")

    if policy.max_length is not None and policy.measure(value) > policy.max_length:
        unit = "bytes" if policy.length_in_bytes else "characters"
        raise InvalidIdentifierError(value, f"longer than {policy.max_length} {unit} allowed by {metadata.dialect}")
    if policy.pattern is not None and policy.pattern.fullmatch(value) is None:
        raise InvalidIdentifierError(value, f"does not match pattern {policy.pattern.pattern!r}")
    return value
