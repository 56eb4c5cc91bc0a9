"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Apifetch, a product of Garudex Labs

CLI entry point for Apifetch.

Issues a single request through the request pipeline and prints the
decoded response.
"""

import asyncio
import json
import sys
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import click

from apifetch._version import __version__
from apifetch.client import HttpClient, RequestDescriptor
from apifetch.config.settings import get_default_config_path, load_config
from apifetch.exceptions import ApifetchError, InvalidConfigurationError, RequestError
from apifetch.http.body import Body, FormData
from apifetch.http.methods import HttpMethod
from apifetch.logging_config import setup_logging
from apifetch.cli.context import CLIContext, pass_context
from apifetch.transport.base import ResponseBody


def _split_pair(value: str, separator: str, option: str) -> Tuple[str, str]:
    if separator not in value:
        raise click.BadParameter(f"expected KEY{separator}VALUE, got '{value}'", param_hint=option)
    key, _, item = value.partition(separator)
    return key.strip(), item.strip()


def _parse_query(values: Tuple[str, ...]) -> Dict[str, Any]:
    params: Dict[str, Any] = {}
    for value in values:
        key, item = _split_pair(value, "=", "--query")
        if key in params:
            existing = params[key]
            params[key] = existing + [item] if isinstance(existing, list) else [existing, item]
        else:
            params[key] = item
    return params


def _build_body(data: Optional[str], form: Tuple[str, ...], files: Tuple[str, ...]) -> Body:
    if data is not None and (form or files):
        raise click.UsageError("--data cannot be combined with --form or --file")

    if form or files:
        payload = FormData()
        for value in form:
            payload.add_field(*_split_pair(value, "=", "--form"))
        for value in files:
            name, path = _split_pair(value, "=", "--file")
            file_path = Path(path).expanduser()
            if not file_path.is_file():
                raise click.BadParameter(f"file not found: {path}", param_hint="--file")
            payload.add_file(name, file_path.name, file_path.read_bytes())
        return payload

    if data is None:
        return ""
    try:
        value = json.loads(data)
    except json.JSONDecodeError:
        return data
    # JSON strings and null are already their own encoding
    if value is None or isinstance(value, str):
        return data
    return value


async def _execute(ctx: CLIContext, descriptor: RequestDescriptor) -> str:
    client = HttpClient.from_config(ctx.config, transport=ctx.transport)
    try:
        result = await client.request(descriptor)
        if isinstance(result, ResponseBody):
            return await result.text()
        return json.dumps(result, indent=2, ensure_ascii=False)
    finally:
        # Injected transports belong to the caller
        if ctx.transport is None:
            await client.aclose()


def _run(ctx: CLIContext, descriptor: RequestDescriptor) -> None:
    try:
        output = asyncio.run(_execute(ctx, descriptor))
    except RequestError as e:
        click.echo(f"Error: {e.method} {e.resource} failed: {e.message}", err=True)
        if e.status is not None:
            click.echo(f"Status: {e.status}", err=True)
        click.echo(f"Requested at: {e.request_timestamp}", err=True)
        if e.response_body:
            click.echo(e.response_body, err=True)
        sys.exit(1)
    except json.JSONDecodeError as e:
        click.echo(f"Error: response declared JSON but could not be parsed: {e}", err=True)
        sys.exit(1)
    except ApifetchError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    click.echo(output)


@click.group()
@click.option(
    '--config',
    '-c',
    type=click.Path(exists=False, dir_okay=False, path_type=Path),
    default=None,
    help=f'Path to configuration file (default: {get_default_config_path()})',
)
@click.option(
    '--base-url',
    '-b',
    default=None,
    help='Base URL prepended to request paths (overrides configuration)',
)
@click.option(
    '--header',
    '-H',
    'headers',
    multiple=True,
    help='Default header as KEY:VALUE, may be repeated',
)
@click.option(
    '--log-level',
    '-l',
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'], case_sensitive=False),
    default=None,
    help='Set logging level (default: from configuration)',
)
@click.version_option(version=__version__, prog_name='apifetch')
@pass_context
def cli(
    ctx: CLIContext,
    config: Optional[Path],
    base_url: Optional[str],
    headers: Tuple[str, ...],
    log_level: Optional[str],
):
    """
    Apifetch - issue HTTP requests against a base URL.

    JSON responses are pretty-printed, anything else is printed as text.
    """
    # Quiet logging to stderr while the configuration itself is loaded
    setup_logging(level=log_level or "WARNING", json_format=False)

    ctx.config_path = str(config) if config else None
    try:
        ctx.config = load_config(ctx.config_path)
    except InvalidConfigurationError as e:
        click.echo(f"Error: Invalid configuration: {e}", err=True)
        sys.exit(1)

    log_file = Path(ctx.config.logging.file) if ctx.config.logging.file else None
    setup_logging(
        level=(log_level or ctx.config.logging.level).upper(),
        log_file=log_file,
        json_format=ctx.config.logging.format == "json",
    )

    if base_url is not None:
        ctx.config.client.base_url = base_url

    extra_headers = dict(_split_pair(value, ":", "--header") for value in headers)
    ctx.config.client.default_headers = {**ctx.config.client.default_headers, **extra_headers}


def _query_options(func):
    func = click.option(
        '--absolute',
        is_flag=True,
        help='Treat PATH as a full URL and skip the base URL',
    )(func)
    func = click.option(
        '--query',
        '-q',
        multiple=True,
        help='Query parameter as KEY=VALUE, may be repeated',
    )(func)
    return func


def _body_options(func):
    func = click.option(
        '--file',
        'files',
        multiple=True,
        help='Multipart file part as NAME=PATH, may be repeated',
    )(func)
    func = click.option(
        '--form',
        multiple=True,
        help='Multipart form field as KEY=VALUE, may be repeated',
    )(func)
    func = click.option(
        '--data',
        '-d',
        default=None,
        help='Request body; valid JSON is sent as JSON, anything else as raw text',
    )(func)
    return func


@cli.command('get')
@click.argument('path')
@_query_options
@pass_context
def get_command(ctx: CLIContext, path: str, query: Tuple[str, ...], absolute: bool):
    """Send a GET request."""
    _run(ctx, RequestDescriptor(HttpMethod.GET, path, None, _parse_query(query), None, absolute))


@cli.command('delete')
@click.argument('path')
@_query_options
@pass_context
def delete_command(ctx: CLIContext, path: str, query: Tuple[str, ...], absolute: bool):
    """Send a DELETE request."""
    _run(ctx, RequestDescriptor(HttpMethod.DELETE, path, None, _parse_query(query), None, absolute))


def _make_body_command(method: HttpMethod):
    @click.argument('path')
    @_query_options
    @_body_options
    @pass_context
    def command(
        ctx: CLIContext,
        path: str,
        query: Tuple[str, ...],
        absolute: bool,
        data: Optional[str],
        form: Tuple[str, ...],
        files: Tuple[str, ...],
    ):
        body = _build_body(data, form, files)
        _run(ctx, RequestDescriptor(method, path, body, _parse_query(query), None, absolute))

    command.__doc__ = f"Send a {method.value} request."
    return cli.command(method.value.lower())(command)


post_command = _make_body_command(HttpMethod.POST)
put_command = _make_body_command(HttpMethod.PUT)
patch_command = _make_body_command(HttpMethod.PATCH)


def main():
    """Main entry point for the CLI."""
    cli()


if __name__ == '__main__':
    main()
