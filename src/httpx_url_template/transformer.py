"""Request transformation: decide whether and how to expand a request URL.

Precedence, evaluated in order:
  1. an explicit url_template is always expanded, even if url is also set
  2. otherwise, with url_as_template enabled, url itself is expanded
  3. otherwise the configuration is returned as is
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from httpx_url_template.models import ExpansionOptions, RequestConfig
from httpx_url_template.template import URITemplate

if TYPE_CHECKING:
    from collections.abc import Callable

logger = logging.getLogger(__name__)


def transform_request_config(
    config: RequestConfig,
    options: ExpansionOptions | None = None,
) -> RequestConfig:
    """Resolve a request configuration's URL from its template.

    Args:
        config: The outgoing request configuration. It is never mutated.
        options: Expansion options. Defaults to ExpansionOptions().

    Returns:
        A copy with url, url_template and url_template_params resolved when
        a template was applied, otherwise the input configuration itself.

    Raises:
        TemplateSyntaxError: If the template to expand is malformed.
    """
    options = options or ExpansionOptions()
    params = config.url_template_params if config.url_template_params is not None else {}

    if config.url_template is not None:
        template = config.url_template
        logger.debug("Expanding explicit url_template %s", template)
    elif options.url_as_template and config.url is not None:
        template = config.url
        logger.debug("Expanding url as template %s", template)
    else:
        return config

    url = URITemplate(template).expand(params)
    return config.model_copy(
        update={"url": url, "url_template": template, "url_template_params": params}
    )


def make_template_interceptor(
    options: ExpansionOptions | None = None,
) -> Callable[[RequestConfig], RequestConfig]:
    """Build a request interceptor bound to the given options.

    Args:
        options: Expansion options shared by every request the interceptor sees.

    Returns:
        A function mapping a RequestConfig to its resolved RequestConfig.
    """
    options = options or ExpansionOptions()

    def interceptor(config: RequestConfig) -> RequestConfig:
        return transform_request_config(config, options)

    return interceptor
