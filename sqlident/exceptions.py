from typing import Any, Optional

__all__ = (
    "EmptyIdentifierListError",
    "InvalidIdentifierError",
    "MetadataUnavailableError",
    "SQLIdentError",
    "UnboundParameterError",
)


class SQLIdentError(Exception):
    """Base exception class from which all sqlident exceptions inherit."""

    detail: str

    def __init__(self, *args: Any, detail: str = "") -> None:
        """Initialize ``SQLIdentError``.

        Args:
            *args: args are converted to :class:`str` before passing to :class:`Exception`
            detail: detail of the exception.
        """
        str_args = [str(arg) for arg in args if arg]
        if not detail:
            if str_args:
                detail, *str_args = str_args
            elif hasattr(self, "detail"):
                detail = self.detail
        self.detail = detail
        super().__init__(*str_args)

    def __repr__(self) -> str:
        if self.detail:
            return f"{self.__class__.__name__} - {self.detail}"
        return self.__class__.__name__

    def __str__(self) -> str:
        return " ".join((*self.args, self.detail)).strip()


class InvalidIdentifierError(SQLIdentError, ValueError):
    """Raised when a value cannot be used as a quoted SQL identifier."""

    identifier: object
    reason: str

    def __init__(self, identifier: object, reason: str) -> None:
        super().__init__(detail=f"Invalid identifier {identifier!r}: {reason}")
        self.identifier = identifier
        self.reason = reason


class EmptyIdentifierListError(SQLIdentError, ValueError):
    """Raised when an identifier list binding receives no identifiers."""

    def __init__(self, parameter: Optional[str] = None) -> None:
        message = "Identifier list cannot be empty."
        if parameter:
            message = f"Identifier list for parameter {parameter!r} cannot be empty."
        super().__init__(detail=message)
        self.parameter = parameter


class UnboundParameterError(SQLIdentError):
    """Raised when a template parameter has no identifier bound at render time."""

    parameter: str
    sql: Optional[str]

    def __init__(self, parameter: str, sql: Optional[str] = None) -> None:
        detail_message = f"Unset parameter: {parameter}"
        if sql:
            detail_message = f"{detail_message}\nSQL: {sql}"
        super().__init__(detail=detail_message)
        self.parameter = parameter
        self.sql = sql


class MetadataUnavailableError(SQLIdentError):
    """Identifier quoting rules could not be obtained for a dialect.

    Raised when a statement is prepared, never later: without quoting metadata
    no identifier can be escaped, and no default quoting style is assumed.
    """

    dialect: Optional[str]

    def __init__(self, message: Optional[str] = None, dialect: Optional[str] = None) -> None:
        if message is None:
            message = "Identifier quoting metadata is unavailable."
        if dialect:
            message = f"{message} (Dialect: {dialect})"
        super().__init__(detail=message)
        self.dialect = dialect
