"""Curl-style command-line options for httpx.

curlargs turns the familiar curl flag vocabulary into an HTTP request and a
matching client configuration, so command-line tools can reproduce or debug
HTTP calls without shelling out to curl.

Key Features:
    - Typed option sources that tell "unset" from "set to empty"
    - Fixed body precedence: data > data-binary > data-raw > data-urlencode
      > form > json
    - curl defaults where they differ from httpx: no redirect following
      without --location, no overall timeout without --max-time
    - click integration registering every recognized option
    - Async execution through httpx with redirect and timeout policy

Quick Start:
    Build and send a request from a click command::

        import asyncio

        import click
        from curlargs import (
            ClickOptionSource,
            CurlHTTPClient,
            build_client,
            build_request,
            curl_options,
        )

        @click.command()
        @curl_options
        @click.argument("args", nargs=-1)
        def fetch(args, **_):
            options = ClickOptionSource(click.get_current_context())
            request = build_request(options, args)
            config = build_client(options)

            async def run():
                async with CurlHTTPClient(config) as client:
                    return await client.send(request)

            click.echo(asyncio.run(run()).text)

    Or without click::

        options = MappingOptionSource({
            "request": "POST",
            "url": "https://httpbin.org/post",
            "header": ["X-API-Version: v1"],
            "json": '{"name": "curlargs"}',
        })
        request = build_request(options)

See Also:
    - RequestDescriptor: The assembled request
    - ClientConfiguration: The assembled client settings
    - RedirectPolicy: Redirect rule consumed by CurlHTTPClient
"""

from .client import (
    ClientConfiguration,
    RedirectDecision,
    RedirectMode,
    RedirectPolicy,
    build_client,
)
from .errors import CurlArgsError, InvalidProxyError, MissingRequiredFieldsError
from .flags import OPTIONS, ClickOptionSource, OptionSpec, curl_options
from .http_client import CurlHTTPClient
from .options import MappingOptionSource, OptionKind, OptionSource
from .request import BODY_RESOLVERS, RequestDescriptor, build_request

__all__ = [
    "BODY_RESOLVERS",
    "OPTIONS",
    "ClickOptionSource",
    "ClientConfiguration",
    "CurlArgsError",
    "CurlHTTPClient",
    "InvalidProxyError",
    "MappingOptionSource",
    "MissingRequiredFieldsError",
    "OptionKind",
    "OptionSource",
    "OptionSpec",
    "RedirectDecision",
    "RedirectMode",
    "RedirectPolicy",
    "RequestDescriptor",
    "build_client",
    "build_request",
    "curl_options",
]

__version__ = "0.1.0"
