"""RFC 6570 URI template expansion for httpx requests."""

from httpx_url_template.exceptions import (
    TemplateExpansionError,
    TemplateSyntaxError,
    UrlTemplateError,
)
from httpx_url_template.hooks import attach, route_info
from httpx_url_template.models import ExpansionOptions, RequestConfig, RouteInfo
from httpx_url_template.template import URITemplate, expand
from httpx_url_template.transformer import make_template_interceptor, transform_request_config

__all__ = [
    "ExpansionOptions",
    "RequestConfig",
    "RouteInfo",
    "TemplateExpansionError",
    "TemplateSyntaxError",
    "URITemplate",
    "UrlTemplateError",
    "attach",
    "expand",
    "make_template_interceptor",
    "route_info",
    "transform_request_config",
]
