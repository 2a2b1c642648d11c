"""RFC 6570 URI template parsing and expansion.

Parsing and expansion are delegated to the ``uri-template`` library, which
implements all operators of RFC 6570 level 4. This module adds the value
coercion used for request parameters and maps the library's errors onto
this package's exception hierarchy.

Expansion is pure: the same template and parameters always produce the same
URL, and a template without expressions expands to itself.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

import uri_template
from uri_template import (
    ExpansionFailedError,
    ExpansionInvalidError,
    ExpansionReservedError,
    VariableInvalidError,
)
from uri_template.expansions import Literal

from httpx_url_template.exceptions import TemplateExpansionError, TemplateSyntaxError

if TYPE_CHECKING:
    from uri_template.expansions import ExpressionExpansion


class URITemplate:
    """A parsed URI template.

    Parsing happens on construction, so a malformed template fails early
    with TemplateSyntaxError rather than at expansion time.
    """

    def __init__(self, template: str) -> None:
        """Parse a template string.

        Args:
            template: The URI template, e.g. ``https://x.test/users/{id}{?q}``.

        Raises:
            TemplateSyntaxError: If the template contains a malformed expression.
        """
        self.template = template
        try:
            self._parsed = uri_template.URITemplate(template)
        except (ExpansionInvalidError, ExpansionReservedError) as exc:
            position = _locate(template, exc.expansion)
            raise TemplateSyntaxError(str(exc), template, position) from exc
        except VariableInvalidError as exc:
            position = _locate(template, exc.variable)
            raise TemplateSyntaxError(str(exc), template, position) from exc
        except IndexError as exc:
            # uri-template indexes into empty variable specs such as {a,,b}
            raise TemplateSyntaxError("Empty variable name", template) from exc

    @property
    def expressions(self) -> list[ExpressionExpansion]:
        return [part for part in self._parsed.expansions if not isinstance(part, Literal)]

    @property
    def variable_names(self) -> list[str]:
        """Variable names in order of first appearance."""
        return list(self._parsed.variable_names)

    def expand(self, params: Mapping[str, Any] | None = None) -> str:
        """Substitute parameter values into the template.

        Parameters not referenced by the template are ignored. Referenced
        parameters that are missing, None, or empty composites expand to
        nothing.

        Args:
            params: Parameter values keyed by variable name.

        Returns:
            The expanded URL string.

        Raises:
            TemplateExpansionError: If a prefix modifier is applied to a list
                or dict value.
        """
        values = {name: _coerce(value) for name, value in (params or {}).items()}
        try:
            return self._parsed.expand(**values)
        except ExpansionFailedError as exc:
            message = f"Cannot expand {exc.variable} in {self.template!r}"
            raise TemplateExpansionError(message) from exc

    def __str__(self) -> str:
        return self.template

    def __repr__(self) -> str:
        return f"URITemplate({self.template!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, URITemplate):
            return NotImplemented
        return self.template == other.template

    def __hash__(self) -> int:
        return hash(self.template)


def expand(template: str, params: Mapping[str, Any] | None = None) -> str:
    """Parse and expand a template in one step."""
    return URITemplate(template).expand(params)


def variable_names(template: str) -> list[str]:
    """Return the variable names referenced by a template."""
    return URITemplate(template).variable_names


def _locate(template: str, fragment: str) -> int | None:
    position = template.find(fragment)
    return position if position != -1 else None


def _coerce(value: Any) -> Any:
    """Normalize a parameter value before handing it to the expander."""
    # bool before float: bool is an int subclass
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, Mapping):
        return {key: _coerce(item) for key, item in value.items() if item is not None}
    if isinstance(value, (list, tuple)):
        return [_coerce(item) for item in value if item is not None]
    return value
