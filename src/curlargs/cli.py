"""Command-line entry point: a small curl built on curlargs."""

from __future__ import annotations

import asyncio
import logging
import sys

import click
import httpx

from .client import ClientConfiguration, build_client
from .errors import InvalidProxyError, MissingRequiredFieldsError
from .flags import ClickOptionSource, curl_options
from .http_client import CurlHTTPClient
from .request import RequestDescriptor, build_request

logger = logging.getLogger(__name__)

# curl's exit code for --fail on HTTP errors
FAIL_EXIT_CODE = 22


async def perform(
    config: ClientConfiguration,
    request: RequestDescriptor,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.Response:
    """Execute ``request`` with a client built from ``config``."""
    async with CurlHTTPClient(config, transport=transport) as client:
        return await client.send(request)


def _write_head(response: httpx.Response) -> None:
    click.echo(f"{response.http_version} {response.status_code} {response.reason_phrase}")
    for name, value in response.headers.multi_items():
        click.echo(f"{name}: {value}")
    click.echo()


@click.command(context_settings={"auto_envvar_prefix": "CURLARGS"})
@curl_options
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, writable=True),
    help="Write to file instead of stdout",
)
@click.option(
    "--include", "-i", is_flag=True, help="Include protocol response headers in the output"
)
@click.option("--silent", "-s", is_flag=True, help="Silent mode")
@click.option("--fail", "-f", is_flag=True, help="Fail fast with no output on HTTP errors")
@click.option("--verbose", "-v", is_flag=True, help="Make the operation more talkative")
@click.argument("args", nargs=-1)
@click.pass_context
def main(ctx: click.Context, args: tuple[str, ...], output, include, silent, fail, verbose, **_):
    """Transfer a URL using curl-style options."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        stream=sys.stderr,
        format="%(levelname)s %(name)s: %(message)s",
    )

    options = ClickOptionSource(ctx)
    try:
        request = build_request(options, args)
    except MissingRequiredFieldsError as e:
        raise click.UsageError(f"{e}; specify --request and --url", ctx=ctx) from e
    except httpx.InvalidURL as e:
        raise click.BadParameter(str(e), ctx=ctx, param_hint="URL") from e

    try:
        config = build_client(options)
    except InvalidProxyError as e:
        raise click.BadParameter(str(e), ctx=ctx, param_hint="'--proxy'") from e

    try:
        response = asyncio.run(perform(config, request))
    except httpx.HTTPError as e:
        logger.debug("Request failed", exc_info=True)
        if silent:
            ctx.exit(1)
        raise click.ClickException(f"{request.method} {request.url} failed: {e}") from e

    if fail and response.status_code >= 400:
        if not silent:
            click.echo(f"The requested URL returned error: {response.status_code}", err=True)
        ctx.exit(FAIL_EXIT_CODE)

    if include:
        _write_head(response)

    if output:
        with open(output, "wb") as f:
            f.write(response.content)
    else:
        click.echo(response.content, nl=False)
