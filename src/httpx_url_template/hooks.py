"""httpx adapter: wires the template interceptor into a client.

Template data travels with each request through httpx request extensions:

    client.get("/users/{id}", extensions={"url_template_params": {"id": 7}})
    client.get(url, extensions={"url_template": "/users/{id}", ...})

The interceptor replaces ``build_request`` on the client instance. httpx
request event hooks only see the built ``httpx.Request``: by then the URL
has been parsed, its braces percent-encoded, and ``base_url`` and ``params``
merged in, so a template can no longer be expanded there. Running inside
``build_request`` also keeps transport-level query params and template
params two independent layers.

The resolved template and params are written back into the request
extensions, where response hooks can read them through
``response.request.extensions``.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from httpx_url_template.models import ExpansionOptions, RequestConfig, RouteInfo
from httpx_url_template.transformer import make_template_interceptor

logger = logging.getLogger(__name__)

EXTENSION_TEMPLATE = "url_template"
EXTENSION_PARAMS = "url_template_params"

_ATTACHED_MARKER = "_url_template_attached"


def attach(
    client: httpx.Client | httpx.AsyncClient,
    options: ExpansionOptions | None = None,
    *,
    log_responses: bool = False,
) -> None:
    """Attach the template interceptor to an httpx client.

    Attaching more than once to the same client has no further effect, so
    every request is transformed exactly once.

    Args:
        client: The sync or async httpx client to extend.
        options: Expansion options for every request the client sends.
        log_responses: Also register a response hook that logs route info.
    """
    if getattr(client, _ATTACHED_MARKER, False):
        logger.debug("Template interceptor already attached to %r", client)
        return

    interceptor = make_template_interceptor(options)
    build_request = client.build_request

    def build_templated_request(method: str, url: Any, **kwargs: Any) -> httpx.Request:
        extensions = dict(kwargs.pop("extensions", None) or {})
        config = RequestConfig(
            url=url if isinstance(url, str) else None,
            url_template=extensions.get(EXTENSION_TEMPLATE),
            url_template_params=extensions.get(EXTENSION_PARAMS),
            transport={"method": method, **kwargs},
        )
        resolved = interceptor(config)

        if resolved.url_template is not None:
            url = resolved.url
            extensions[EXTENSION_TEMPLATE] = resolved.url_template
            extensions[EXTENSION_PARAMS] = resolved.url_template_params

        transport = dict(resolved.transport)
        return build_request(transport.pop("method"), url, extensions=extensions, **transport)

    client.build_request = build_templated_request  # type: ignore[method-assign]
    setattr(client, _ATTACHED_MARKER, True)

    if log_responses:
        hook = alog_route if isinstance(client, httpx.AsyncClient) else log_route
        client.event_hooks["response"].append(hook)


def route_info(response: httpx.Response) -> RouteInfo:
    """Summarize a response by the route its request was built from.

    Args:
        response: A response whose request went through an attached client.

    Returns:
        RouteInfo with the route falling back to the URL when no template
        was applied.
    """
    request = response.request
    url = str(request.url)
    template = request.extensions.get(EXTENSION_TEMPLATE)
    return RouteInfo(
        status=response.status_code,
        reason=response.reason_phrase,
        url=url,
        route=template if template is not None else url,
        route_params=request.extensions.get(EXTENSION_PARAMS),
    )


def log_route(response: httpx.Response) -> None:
    """Response event hook for httpx.Client that logs route info."""
    info = route_info(response)
    logger.info(
        "%s %s -> %d %s (route=%s params=%s)",
        response.request.method,
        info.url,
        info.status,
        info.reason,
        info.route,
        info.route_params,
    )


async def alog_route(response: httpx.Response) -> None:
    """Response event hook for httpx.AsyncClient that logs route info."""
    log_route(response)
