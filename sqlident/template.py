"""Identifier template parsing.

A template is ordinary driver SQL in which identifier positions are written as
a marker character followed by a name, e.g. ``SELECT MAX(:col) FROM t WHERE x=?``.
Parsing splits the template into literal SQL segments interleaved with
parameter names. It never fails; text that does not form a token is literal.
"""

from functools import lru_cache
from typing import Final

from mypy_extensions import mypyc_attr

__all__ = ("DEFAULT_MARKER", "ParsedTemplate", "TemplateLexer", "parse_template")

DEFAULT_MARKER: Final = ":"
_NAME_CHARS: Final = frozenset("abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789")


class ParsedTemplate:
    """Immutable result of parsing a template.

    ``literals`` has one more entry than ``parameters`` unless the template
    ends on a parameter, in which case the counts are equal.
    """

    __slots__ = ("literals", "marker", "parameters", "sql")

    def __init__(self, sql: str, literals: "tuple[str, ...]", parameters: "tuple[str, ...]", marker: str) -> None:
        object.__setattr__(self, "sql", sql)
        object.__setattr__(self, "literals", literals)
        object.__setattr__(self, "parameters", parameters)
        object.__setattr__(self, "marker", marker)

    def __setattr__(self, name: str, value: object) -> None:
        msg = f"{type(self).__name__} is immutable"
        raise AttributeError(msg)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ParsedTemplate):
            return NotImplemented
        return self.literals == other.literals and self.parameters == other.parameters

    def __hash__(self) -> int:
        return hash((self.literals, self.parameters))

    def __repr__(self) -> str:
        return f"{type(self).__name__}(literals={self.literals!r}, parameters={self.parameters!r})"

    @property
    def parameter_names(self) -> "tuple[str, ...]":
        """Distinct parameter names in order of first occurrence."""
        return tuple(dict.fromkeys(self.parameters))

    @property
    def has_trailing_literal(self) -> bool:
        return len(self.literals) > len(self.parameters)


@mypyc_attr(allow_interpreted_subclasses=False)
class TemplateLexer:
    """Single pass, left-to-right scanner for identifier parameters.

    A token is the marker followed by the longest run of ASCII letters and
    digits. The first other character ends the token and belongs to the next
    literal. A marker with no name character after it is plain text.
    """

    __slots__ = ("marker",)

    def __init__(self, marker: str = DEFAULT_MARKER) -> None:
        if len(marker) != 1 or marker in _NAME_CHARS:
            msg = f"Parameter marker must be a single non-alphanumeric character, got {marker!r}"
            raise ValueError(msg)
        self.marker = marker

    def tokenize(self, sql: str) -> "tuple[list[str], list[str]]":
        literals: list[str] = []
        parameters: list[str] = []
        length = len(sql)
        start = 0
        pos = sql.find(self.marker)
        while pos != -1:
            end = pos + 1
            while end < length and sql[end] in _NAME_CHARS:
                end += 1
            if end == pos + 1:
                pos = sql.find(self.marker, pos + 1)
                continue
            literals.append(sql[start:pos])
            parameters.append(sql[pos + 1 : end])
            start = end
            pos = sql.find(self.marker, end)
        if start < length:
            literals.append(sql[start:])
        return literals, parameters


@lru_cache(maxsize=512)
def parse_template(sql: str, marker: str = DEFAULT_MARKER) -> ParsedTemplate:
    """Parse a template into literal segments and identifier parameter names.

    Args:
        sql: Template text.
        marker: Character introducing an identifier parameter.

    Returns:
        The parsed template.

    Raises:
        ValueError: If ``marker`` is not a single non-alphanumeric character.

    Examples:
        >>> parse_template("SELECT * FROM :schema.:table WHERE id = ?")
        ParsedTemplate(literals=('SELECT * FROM ', '.', ' WHERE id = ?'), parameters=('schema', 'table'))
    """
    literals, parameters = TemplateLexer(marker).tokenize(sql)
    return ParsedTemplate(sql, tuple(literals), tuple(parameters), marker)
