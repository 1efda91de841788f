"""Protocols for the database driver collaborator."""

from typing import TYPE_CHECKING, Any, Optional, Protocol, runtime_checkable

if TYPE_CHECKING:
    from sqlident.quoting import QuotingMetadata

__all__ = ("CompiledStatementProtocol", "DriverProtocol")


@runtime_checkable
class DriverProtocol(Protocol):
    """What a statement needs from a database driver.

    The driver supplies the dialect's identifier quoting rules and turns
    finished SQL text into something executable. Errors raised by
    ``compile`` reach the caller unchanged.
    """

    def get_quoting_metadata(self) -> "QuotingMetadata": ...  # pragma: no cover

    def compile(self, sql: str) -> Any: ...  # pragma: no cover


@runtime_checkable
class CompiledStatementProtocol(Protocol):
    sql: str

    def execute(self, parameters: Optional[Any] = None) -> Any: ...  # pragma: no cover
