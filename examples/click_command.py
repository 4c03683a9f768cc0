"""Reuse the curl option vocabulary in your own click command."""

import asyncio

import click

from curlargs import ClickOptionSource, CurlHTTPClient, build_client, build_request, curl_options


@click.command()
@curl_options
@click.option("--status-only", is_flag=True, help="Print only the status code")
@click.argument("args", nargs=-1)
@click.pass_context
def probe(ctx, args, status_only, **_):
    """Probe an endpoint, e.g. probe -X GET -L https://httpbin.org/redirect/2"""
    options = ClickOptionSource(ctx)
    request = build_request(options, args)
    config = build_client(options)

    async def send():
        async with CurlHTTPClient(config) as client:
            return await client.send(request)

    response = asyncio.run(send())
    if status_only:
        click.echo(response.status_code)
    else:
        click.echo(response.text)


if __name__ == "__main__":
    probe()
