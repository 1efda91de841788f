"""sqlident: SQL templates with safely bound identifiers."""

from sqlident import adapters, exceptions, utils
from sqlident.__metadata__ import __version__
from sqlident.adapters.dbapi import DBAPIDriver
from sqlident.config import TemplateConfig
from sqlident.escaping import escape_identifier, escape_identifier_list, quote_identifier, quote_identifier_list
from sqlident.exceptions import (
    EmptyIdentifierListError,
    InvalidIdentifierError,
    MetadataUnavailableError,
    SQLIdentError,
    UnboundParameterError,
)
from sqlident.protocols import CompiledStatementProtocol, DriverProtocol
from sqlident.quoting import QuotingMetadata, get_quoting_metadata
from sqlident.statement import ParameterizedStatement
from sqlident.template import ParsedTemplate, parse_template
from sqlident.validation import IdentifierPolicy, validate_identifier

__all__ = (
    "CompiledStatementProtocol",
    "DBAPIDriver",
    "DriverProtocol",
    "EmptyIdentifierListError",
    "IdentifierPolicy",
    "InvalidIdentifierError",
    "MetadataUnavailableError",
    "ParameterizedStatement",
    "ParsedTemplate",
    "QuotingMetadata",
    "SQLIdentError",
    "TemplateConfig",
    "UnboundParameterError",
    "__version__",
    "adapters",
    "escape_identifier",
    "escape_identifier_list",
    "exceptions",
    "get_quoting_metadata",
    "parse_template",
    "quote_identifier",
    "quote_identifier_list",
    "utils",
    "validate_identifier",
)
