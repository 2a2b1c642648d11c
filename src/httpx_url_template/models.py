"""Core data models for httpx-url-template."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

ParamValue = str | int | float | bool
TemplateValue = ParamValue | list[ParamValue] | dict[str, ParamValue]


class ExpansionOptions(BaseModel):
    """Options controlling when a request URL is treated as a template."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    url_as_template: bool = Field(
        default=True,
        alias="urlAsTemplate",
        description="Treat a literal url as a template when no url_template is given",
    )


class RequestConfig(BaseModel):
    """Per-request configuration flowing through the template interceptor.

    The transport layer's own settings (method, headers, query params,
    extensions) live in ``transport`` and are passed through untouched.
    After a template has been applied, ``url_template`` holds the template
    that was expanded and ``url_template_params`` the mapping used.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    url: str | None = Field(default=None, description="Literal URL or template")
    url_template: str | None = Field(
        default=None,
        alias="urlTemplate",
        description="Template that produced url",
    )
    url_template_params: dict[str, TemplateValue | None] | None = Field(
        default=None,
        alias="urlTemplateParams",
        description="Parameter values used to expand url_template",
    )
    transport: dict[str, Any] = Field(
        default_factory=dict,
        description="Settings owned by the HTTP transport, passed through unchanged",
    )

    @property
    def route(self) -> str | None:
        """The template if one was applied, otherwise the plain url."""
        return self.url_template if self.url_template is not None else self.url


class RouteInfo(BaseModel):
    """Summary of a completed request, keyed by the route it was built from."""

    status: int = Field(description="HTTP status code")
    reason: str = Field(default="", description="HTTP reason phrase")
    url: str = Field(description="Final request URL")
    route: str = Field(description="Template the URL was expanded from, or the URL itself")
    route_params: dict[str, Any] | None = Field(
        default=None, description="Parameters used to expand the route"
    )
