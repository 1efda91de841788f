from typing import Any

from sqlident.template import DEFAULT_MARKER, TemplateLexer

__all__ = ("TemplateConfig",)


class TemplateConfig:
    """Settings applied when a template is prepared.

    Args:
        marker: Character introducing an identifier parameter in the template.
        log_sql: Log the rendered SQL at DEBUG level before it reaches the driver.
    """

    __slots__ = ("log_sql", "marker")

    def __init__(self, marker: str = DEFAULT_MARKER, log_sql: bool = False) -> None:
        TemplateLexer(marker)
        self.marker = marker
        self.log_sql = log_sql

    def replace(self, **kwargs: Any) -> "TemplateConfig":
        """Create a new config with updated attributes."""
        current = {name: getattr(self, name) for name in self.__slots__}
        current.update(kwargs)
        return TemplateConfig(**current)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TemplateConfig):
            return NotImplemented
        return self.marker == other.marker and self.log_sql == other.log_sql

    def __hash__(self) -> int:
        return hash((self.marker, self.log_sql))

    def __repr__(self) -> str:
        return f"{type(self).__name__}(marker={self.marker!r}, log_sql={self.log_sql!r})"
