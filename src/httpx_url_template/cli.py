"""Command-line interface for inspecting and expanding URI templates."""

from __future__ import annotations

import json
import logging
import sys
from typing import Any

import click
from click.core import ParameterSource
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from httpx_url_template.config import load_config
from httpx_url_template.exceptions import UrlTemplateError
from httpx_url_template.models import ExpansionOptions, RequestConfig
from httpx_url_template.template import URITemplate
from httpx_url_template.transformer import transform_request_config

console = Console()


def _setup_logging(level: str) -> None:
    """Configure logging with the specified level.

    Args:
        level: Logging level string (debug, info, warning, error).
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(
        level=numeric_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _coerce(value: str) -> str | int | float | bool:
    """Turn a command-line value into a bool, number, or string.

    Numbers are only recognized when they print back as the same text, so
    values like 007 or 1e3 reach the template exactly as typed.
    """
    if value in ("true", "false"):
        return value == "true"
    for cast in (int, float):
        try:
            number = cast(value)
        except ValueError:
            continue
        if str(number) == value:
            return number
    return value


def _parse_params(pairs: tuple[str, ...]) -> dict[str, Any]:
    params: dict[str, Any] = {}
    for pair in pairs:
        name, sep, value = pair.partition("=")
        if not sep or not name:
            raise click.BadParameter(f"Expected name=value, got {pair!r}", param_hint="--param")
        params[name] = _coerce(value)
    return params


@click.group()
@click.option("--config", "-c", default=None, help="Path to url-template.yaml config file")
@click.pass_context
def main(ctx: click.Context, config: str | None) -> None:
    """url-template: expand RFC 6570 URI templates the way the httpx hook does."""
    ctx.ensure_object(dict)
    try:
        cfg = load_config(config)
    except UrlTemplateError as exc:
        raise click.ClickException(str(exc)) from exc
    ctx.obj["config"] = cfg
    _setup_logging(cfg.logging.level)


@main.command()
@click.argument("template")
@click.option("--param", "-p", "params", multiple=True, help="Parameter as name=value")
@click.option("--json-output", is_flag=True, help="Output as JSON")
def expand(template: str, params: tuple[str, ...], json_output: bool) -> None:
    """Expand TEMPLATE with the given parameters."""
    values = _parse_params(params)
    try:
        url = URITemplate(template).expand(values)
    except UrlTemplateError as exc:
        raise click.ClickException(str(exc)) from exc

    if json_output:
        click.echo(
            json.dumps(
                {"url": url, "url_template": template, "url_template_params": values},
                indent=2,
            )
        )
    else:
        click.echo(url)


@main.command()
@click.argument("template")
@click.option("--json-output", is_flag=True, help="Output as JSON")
def variables(template: str, json_output: bool) -> None:
    """List the expressions and variables in TEMPLATE."""
    try:
        parsed = URITemplate(template)
    except UrlTemplateError as exc:
        raise click.ClickException(str(exc)) from exc

    rows = [
        {
            "name": var.name,
            "operator": expression.operator,
            "prefix": var.max_length or None,
            "explode": var.explode,
        }
        for expression in parsed.expressions
        for var in expression.variables
    ]

    if json_output:
        click.echo(json.dumps(rows, indent=2))
        return

    table = Table(title=f"Variables in {escape(template)}")
    table.add_column("Name", style="cyan")
    table.add_column("Operator", style="yellow")
    table.add_column("Prefix", justify="right")
    table.add_column("Explode")
    for row in rows:
        table.add_row(
            row["name"],
            row["operator"] or "-",
            str(row["prefix"] or "-"),
            "yes" if row["explode"] else "no",
        )
    console.print(table)


@main.command()
@click.option("--url", default=None, help="Literal request URL")
@click.option("--template", "-t", default=None, help="Explicit URL template")
@click.option("--param", "-p", "params", multiple=True, help="Parameter as name=value")
@click.option(
    "--url-as-template/--no-url-as-template",
    default=True,
    help="Treat --url as a template (defaults to the config file setting)",
)
@click.pass_context
def transform(
    ctx: click.Context,
    url: str | None,
    template: str | None,
    params: tuple[str, ...],
    url_as_template: bool,
) -> None:
    """Run a request configuration through the template interceptor."""
    cfg = ctx.obj["config"]
    options = cfg.expansion
    if ctx.get_parameter_source("url_as_template") is not ParameterSource.DEFAULT:
        options = ExpansionOptions(url_as_template=url_as_template)

    config = RequestConfig(
        url=url,
        url_template=template,
        url_template_params=_parse_params(params) if params else None,
    )
    try:
        result = transform_request_config(config, options)
    except UrlTemplateError as exc:
        raise click.ClickException(str(exc)) from exc

    click.echo(result.model_dump_json(indent=2, exclude_none=True, exclude={"transport"}))


if __name__ == "__main__":
    main()
