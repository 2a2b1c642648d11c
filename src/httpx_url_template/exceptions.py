"""Exception hierarchy for httpx-url-template."""

from __future__ import annotations


class UrlTemplateError(Exception):
    """Base exception for all url-template errors."""


class TemplateSyntaxError(UrlTemplateError, ValueError):
    """Raised when a URI template contains a malformed expression.

    Attributes:
        template: The template string that failed to parse.
        position: Offset of the offending segment, if it could be located.
    """

    def __init__(self, message: str, template: str, position: int | None = None) -> None:
        where = f" at position {position}" if position is not None else ""
        super().__init__(f"{message}{where} in {template!r}")
        self.template = template
        self.position = position


class TemplateExpansionError(UrlTemplateError, ValueError):
    """Raised when a parameter value cannot be expanded, e.g. a prefix on a list."""


class ConfigurationError(UrlTemplateError):
    """Raised when a configuration file is missing required structure."""
