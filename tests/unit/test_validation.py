"""Tests for identifier validation."""

import re

import pytest

from sqlident.exceptions import InvalidIdentifierError
from sqlident.quoting import QuotingMetadata
from sqlident.validation import IdentifierPolicy, validate_identifier

POSTGRES = QuotingMetadata("postgres", '"', '"', IdentifierPolicy(max_length=63))
TSQL = QuotingMetadata("tsql", "[", "]", IdentifierPolicy(max_length=128))


@pytest.mark.parametrize(
    "identifier",
    ["name", "Name", "user_id", "_private", "col1", "年金计划号", "with space", "dash-ed", "dollar$", "a.b"],
)
def test_allowed_identifiers_pass(identifier: str) -> None:
    assert validate_identifier(identifier, POSTGRES) == identifier


def test_empty_identifier_rejected() -> None:
    with pytest.raises(InvalidIdentifierError, match="cannot be empty"):
        validate_identifier("", POSTGRES)


@pytest.mark.parametrize("value", [None, 1, b"name", ["a"]])
def test_non_string_rejected(value: object) -> None:
    with pytest.raises(InvalidIdentifierError, match="expected str"):
        validate_identifier(value, POSTGRES)


@pytest.mark.parametrize("identifier", ['na"me', '"', 'x" OR 1=1 --'])
def test_quote_close_character_rejected(identifier: str) -> None:
    with pytest.raises(InvalidIdentifierError, match="quote character"):
        validate_identifier(identifier, POSTGRES)


@pytest.mark.parametrize("identifier", ["a]b", "a[b"])
def test_bracket_quotes_rejected_for_tsql(identifier: str) -> None:
    with pytest.raises(InvalidIdentifierError, match="quote character"):
        validate_identifier(identifier, TSQL)


def test_double_quote_allowed_when_not_dialect_quote() -> None:
    assert validate_identifier('we"ird', TSQL) == 'we"ird'


@pytest.mark.parametrize("identifier", ["a\x00b", "a\nb", "a\rb", "a\tb", "a\x1bb", "a\x7fb"])
def test_control_characters_rejected(identifier: str) -> None:
    with pytest.raises(InvalidIdentifierError, match="control character"):
        validate_identifier(identifier, POSTGRES)


@pytest.mark.parametrize("identifier", ["a;b", "t; DROP TABLE users", ";"])
def test_statement_terminator_rejected(identifier: str) -> None:
    with pytest.raises(InvalidIdentifierError, match="statement terminator"):
        validate_identifier(identifier, POSTGRES)


def test_max_length_enforced() -> None:
    assert validate_identifier("x" * 63, POSTGRES) == "x" * 63
    with pytest.raises(InvalidIdentifierError, match="longer than 63"):
        validate_identifier("x" * 64, POSTGRES)


def test_no_max_length_when_policy_unbounded() -> None:
    metadata = QuotingMetadata("sqlite", '"', '"', IdentifierPolicy())
    assert validate_identifier("x" * 5000, metadata)


def test_embedded_quotes_allowed_by_policy() -> None:
    metadata = QuotingMetadata("postgres", '"', '"', IdentifierPolicy(allow_embedded_quotes=True))
    assert validate_identifier('na"me', metadata) == 'na"me'


def test_embedded_quotes_policy_still_rejects_terminator() -> None:
    metadata = QuotingMetadata("postgres", '"', '"', IdentifierPolicy(allow_embedded_quotes=True))
    with pytest.raises(InvalidIdentifierError):
        validate_identifier('a";b', metadata)


def test_pattern_policy() -> None:
    metadata = QuotingMetadata("postgres", '"', '"', IdentifierPolicy(pattern=r"[A-Za-z_][A-Za-z0-9_]*"))
    assert validate_identifier("user_id", metadata) == "user_id"
    with pytest.raises(InvalidIdentifierError, match="does not match pattern"):
        validate_identifier("1st", metadata)
    with pytest.raises(InvalidIdentifierError, match="does not match pattern"):
        validate_identifier("with space", metadata)


def test_policy_accepts_compiled_pattern() -> None:
    pattern = re.compile(r"[a-z]+")
    assert IdentifierPolicy(pattern=pattern).pattern is pattern


def test_policy_rejects_non_positive_max_length() -> None:
    with pytest.raises(ValueError, match="max_length"):
        IdentifierPolicy(max_length=0)


def test_policy_replace_and_equality() -> None:
    policy = IdentifierPolicy(max_length=63)
    relaxed = policy.replace(allow_embedded_quotes=True)
    assert relaxed.max_length == 63
    assert relaxed.allow_embedded_quotes is True
    assert policy.allow_embedded_quotes is False
    assert policy == IdentifierPolicy(max_length=63)
    assert policy != relaxed


def test_error_carries_identifier_and_reason() -> None:
    with pytest.raises(InvalidIdentifierError) as exc_info:
        validate_identifier("a;b", POSTGRES)
    assert exc_info.value.identifier == "a;b"
    assert "terminator" in exc_info.value.reason
    assert isinstance(exc_info.value, ValueError)


CLICKHOUSE = QuotingMetadata("clickhouse", '"', '"', IdentifierPolicy(max_length=255), escape_chars="\\")


@pytest.mark.parametrize("identifier", ["x\\", "a\\b", "\\", 'x\\" FROM secrets --'])
def test_backslash_rejected_where_it_escapes_identifiers(identifier: str) -> None:
    with pytest.raises(InvalidIdentifierError, match="identifier escape character"):
        validate_identifier(identifier, CLICKHOUSE)


def test_backslash_rejected_even_when_quotes_allowed() -> None:
    metadata = QuotingMetadata(
        "clickhouse", '"', '"', IdentifierPolicy(allow_embedded_quotes=True), escape_chars="\\"
    )
    assert validate_identifier('na"me', metadata) == 'na"me'
    with pytest.raises(InvalidIdentifierError, match="escape character"):
        validate_identifier("x\\", metadata)


def test_backslash_allowed_where_quotes_escape_by_doubling() -> None:
    assert validate_identifier("a\\b", POSTGRES) == "a\\b"


def test_closing_quote_is_not_listed_as_escape_character() -> None:
    metadata = QuotingMetadata("custom", "`", "`", escape_chars=["`", "\\"])
    assert metadata.escape_chars == frozenset({"\\"})


def test_byte_length_counts_utf8_bytes() -> None:
    metadata = QuotingMetadata("postgres", '"', '"', IdentifierPolicy(max_length=63, length_in_bytes=True))
    assert validate_identifier("年" * 21, metadata) == "年" * 21
    with pytest.raises(InvalidIdentifierError, match="longer than 63 bytes"):
        validate_identifier("年" * 30, metadata)
    assert validate_identifier("x" * 63, metadata) == "x" * 63


def test_character_length_counts_code_points() -> None:
    assert validate_identifier("年" * 30, POSTGRES) == "年" * 30


def test_policy_measure() -> None:
    assert IdentifierPolicy().measure("年金") == 2
    assert IdentifierPolicy(length_in_bytes=True).measure("年金") == 6
    assert IdentifierPolicy(length_in_bytes=True) != IdentifierPolicy()
