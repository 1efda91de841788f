"""Templated SQL statements with safely bound identifiers.

Ordinary values keep using the driver's placeholders. Identifiers (table,
column and schema names) are written as named parameters, validated and
quoted for the driver's dialect, and spliced in only at whole-token positions.

Example:
    >>> stmt = ParameterizedStatement.prepare(driver, "SELECT MAX(:col) FROM mytable WHERE name=?")
    >>> stmt.bind_identifier("col", column_name).prepare_statement().execute(("foo",))

Parameters take the place of entire identifiers. ``SELECT * FROM :prefix_table``
binds ``prefix`` and leaves ``_table`` as literal text, which the driver will
most likely reject. Bind the full name instead: ``SELECT * FROM :tableName``.
"""

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING, Any, Optional

from typing_extensions import Self

from sqlident.config import TemplateConfig
from sqlident.escaping import quote_identifier, quote_identifier_list
from sqlident.exceptions import (
    EmptyIdentifierListError,
    InvalidIdentifierError,
    MetadataUnavailableError,
    UnboundParameterError,
)
from sqlident.template import parse_template
from sqlident.utils.logging import get_logger, log_event

if TYPE_CHECKING:
    from sqlident.protocols import DriverProtocol
    from sqlident.quoting import QuotingMetadata
    from sqlident.template import ParsedTemplate

__all__ = ("ParameterizedStatement",)

logger = get_logger("statement")


class ParameterizedStatement:
    """A SQL template whose identifier parameters are bound before compiling.

    Instances are single-use builders: bind every identifier, then call
    :meth:`prepare_statement` (or :meth:`render` for the text alone). They
    hold no resources and are not safe to share between threads.
    """

    __slots__ = ("_bindings", "_config", "_driver", "_metadata", "_template")

    def __init__(
        self,
        driver: "DriverProtocol",
        template: "ParsedTemplate",
        metadata: "QuotingMetadata",
        config: "Optional[TemplateConfig]" = None,
    ) -> None:
        self._driver = driver
        self._template = template
        self._metadata = metadata
        self._config = config or TemplateConfig(marker=template.marker)
        self._bindings: dict[str, str] = {}

    @classmethod
    def prepare(cls, driver: "DriverProtocol", sql: str, config: "Optional[TemplateConfig]" = None) -> Self:
        """Parse ``sql`` and fetch the driver's identifier quoting rules.

        Named parameters are a marker (``:`` by default) followed by one or
        more ASCII letters or digits, e.g. ``:fooBar1234``. Any other
        character ends the name, so ``:foo-10`` is the parameter ``foo``
        followed by ``-10``. A name may appear several times; every
        occurrence uses the same bound identifier::

            SELECT * FROM :schema.orders o JOIN :schema.customers c ON c.id = o.customer_id

        Args:
            driver: Database driver supplying quoting metadata and compilation.
            sql: Template text with driver placeholders and identifier parameters.
            config: Template settings.

        Raises:
            MetadataUnavailableError: If the driver cannot provide quoting metadata.

        Returns:
            A statement ready for identifier binding.
        """
        config = config or TemplateConfig()
        template = parse_template(sql, config.marker)
        try:
            metadata = driver.get_quoting_metadata()
        except MetadataUnavailableError:
            raise
        except Exception as e:
            msg = f"Driver failed to provide identifier quoting metadata: {e}"
            raise MetadataUnavailableError(msg) from e
        log_event(
            logger,
            logging.DEBUG,
            "Prepared template for %s",
            metadata.dialect,
            dialect=metadata.dialect,
            parameters=list(template.parameter_names),
        )
        return cls(driver, template, metadata, config)

    @property
    def sql(self) -> str:
        """The template text."""
        return self._template.sql

    @property
    def template(self) -> "ParsedTemplate":
        return self._template

    @property
    def metadata(self) -> "QuotingMetadata":
        return self._metadata

    @property
    def parameters(self) -> "tuple[str, ...]":
        """Distinct identifier parameter names, in template order."""
        return self._template.parameter_names

    @property
    def unbound_parameters(self) -> "tuple[str, ...]":
        return tuple(name for name in self._template.parameter_names if name not in self._bindings)

    def bind_identifier(self, name: str, value: str) -> Self:
        """Bind a single identifier to the parameter ``name``.

        A previous binding for ``name`` is replaced. Names that do not appear
        in the template are accepted and ignored at render time.

        Raises:
            InvalidIdentifierError: If ``value`` is not a safe identifier.

        Returns:
            This statement, for chaining.
        """
        try:
            escaped = quote_identifier(value, self._metadata)
        except InvalidIdentifierError as e:
            self._log_rejection(name, e)
            raise
        self._store(name, escaped, 1)
        return self

    def bind_identifiers(self, name: str, values: "Iterable[str]") -> Self:
        """Bind a comma separated identifier list to the parameter ``name``.

        Only use this where the template expects a list, e.g. ``SELECT :cols FROM t``.

        Raises:
            EmptyIdentifierListError: If ``values`` is empty.
            InvalidIdentifierError: If any value is not a safe identifier.
            TypeError: If ``values`` is a single string.

        Returns:
            This statement, for chaining.
        """
        identifiers = values if isinstance(values, str) else list(values)
        try:
            escaped = quote_identifier_list(identifiers, self._metadata)
        except EmptyIdentifierListError:
            raise EmptyIdentifierListError(name) from None
        except InvalidIdentifierError as e:
            self._log_rejection(name, e)
            raise
        self._store(name, escaped, len(identifiers))
        return self

    def render(self) -> str:
        """Assemble the final SQL text.

        Raises:
            UnboundParameterError: For the first parameter, in template order,
                that has no binding.
        """
        literals = self._template.literals
        parts: list[str] = []
        for index, name in enumerate(self._template.parameters):
            binding = self._bindings.get(name)
            if binding is None:
                raise UnboundParameterError(name, self._template.sql)
            parts.append(literals[index])
            parts.append(binding)
        parts.extend(literals[len(self._template.parameters) :])
        return "".join(parts)

    def prepare_statement(self) -> Any:
        """Render the SQL and hand it to the driver for compilation.

        Raises:
            UnboundParameterError: If any identifier parameter is unbound. The
                driver is not called in that case.

        Returns:
            Whatever the driver's ``compile`` returns. Driver errors propagate
            unchanged.
        """
        sql = self.render()
        if self._config.log_sql:
            log_event(logger, logging.DEBUG, "Compiling rendered SQL: %s", sql, dialect=self._metadata.dialect, sql=sql)
        return self._driver.compile(sql)

    def _store(self, name: str, escaped: str, count: int) -> None:
        if name not in self._template.parameter_names:
            logger.debug("Binding %r does not appear in the template and will be ignored", name)
        self._bindings[name] = escaped
        log_event(
            logger,
            logging.DEBUG,
            "Bound identifier parameter %s",
            name,
            parameter=name,
            dialect=self._metadata.dialect,
            identifiers=count,
        )

    def _log_rejection(self, name: str, error: InvalidIdentifierError) -> None:
        log_event(
            logger,
            logging.DEBUG,
            "Rejected identifier for parameter %s: %s",
            name,
            error.reason,
            parameter=name,
            dialect=self._metadata.dialect,
            reason=error.reason,
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}(sql={self._template.sql!r}, dialect={self._metadata.dialect!r})"
