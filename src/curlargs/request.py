"""Request assembly from curl-style options.

This module turns an option source into a :class:`RequestDescriptor`, an
immutable method/URL/headers/cookies/body bundle that converts to an
``httpx.Request`` for execution.

Body sources are mutually exclusive. They are tried in the order of
:data:`BODY_RESOLVERS` and the first one that yields a body wins:

    data > data-binary > data-raw > data-urlencode > form > json

Example:
    Build and inspect a request::

        from curlargs import MappingOptionSource, build_request

        request = build_request(
            MappingOptionSource({"get": True, "data": "q=curl"}),
            ["https://example.com/search"],
        )
        assert request.url == "https://example.com/search?q=curl"
        assert request.method == "GET"
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Callable

import httpx

from .errors import MissingRequiredFieldsError
from .options import OptionSource
from .parsing import (
    append_query,
    parse_cookies,
    parse_credentials,
    parse_header,
    urlencode_data,
)

logger = logging.getLogger(__name__)

Header = tuple[str, str]


@dataclass(frozen=True)
class RequestDescriptor:
    """An HTTP request ready to hand to an execution layer.

    Attributes:
        method: Uppercased HTTP method
        url: Target URL, including any query data folded in by --get
        headers: Ordered (name, value) pairs; repeated names are all sent
        cookies: Ordered (name, value) cookie pairs
        body: Request body, empty when no body source was given

    Notes:
        Two descriptors built from the same options compare equal.
    """

    method: str
    url: str
    headers: tuple[Header, ...] = ()
    cookies: tuple[Header, ...] = ()
    body: bytes = b""

    def get_header(self, name: str) -> list[str]:
        """Return every value of header ``name`` in insertion order."""
        lowered = name.lower()
        return [value for key, value in self.headers if key.lower() == lowered]

    def to_httpx(self) -> httpx.Request:
        """Convert to an ``httpx.Request``.

        Cookies join an explicit ``Cookie`` header if there is one, so only a
        single ``Cookie`` line is sent. Header names and values are sent as
        UTF-8 bytes, like the body.
        """
        headers = list(self.headers)
        if self.cookies:
            cookie = "; ".join(f"{k}={v}" for k, v in self.cookies)
            for index, (name, value) in enumerate(headers):
                if name.lower() == "cookie":
                    headers[index] = (name, f"{value}; {cookie}" if value else cookie)
                    break
            else:
                headers.append(("Cookie", cookie))

        encoded = [
            (name.encode("utf-8", "surrogateescape"), value.encode("utf-8", "surrogateescape"))
            for name, value in headers
        ]
        return httpx.Request(self.method, self.url, headers=encoded, content=self.body)


@dataclass(frozen=True)
class ResolvedBody:
    """Body chosen by a resolver, with the headers it implies."""

    content: str
    headers: tuple[Header, ...] = ()


BodyResolver = Callable[[OptionSource], "ResolvedBody | None"]


def _verbatim(name: str) -> BodyResolver:
    def resolve(options: OptionSource) -> ResolvedBody | None:
        value, _ = options.get_string(name)
        return ResolvedBody(value) if value else None

    resolve.__name__ = f"resolve_{name.replace('-', '_')}"
    return resolve


def resolve_urlencoded(options: OptionSource) -> ResolvedBody | None:
    value, _ = options.get_string("data-urlencode")
    return ResolvedBody(urlencode_data(value)) if value else None


def resolve_form(options: OptionSource) -> ResolvedBody | None:
    fields, _ = options.get_string_map("form")
    if not fields:
        return None
    return ResolvedBody(
        "&".join(f"{key}={value}" for key, value in fields.items()),
        (("Content-Type", "application/x-www-form-urlencoded"),),
    )


def resolve_json(options: OptionSource) -> ResolvedBody | None:
    value, _ = options.get_string("json")
    if not value:
        return None
    return ResolvedBody(
        value,
        (("Content-Type", "application/json"), ("Accept", "application/json")),
    )


BODY_RESOLVERS: tuple[BodyResolver, ...] = (
    _verbatim("data"),
    _verbatim("data-binary"),
    _verbatim("data-raw"),
    resolve_urlencoded,
    resolve_form,
    resolve_json,
)
"""Body resolvers in precedence order; the first non-None result wins."""


def resolve_body(options: OptionSource) -> ResolvedBody:
    """Pick the request body from the highest-precedence body option."""
    for resolver in BODY_RESOLVERS:
        body = resolver(options)
        if body is not None:
            return body
    return ResolvedBody("")


def resolve_method(options: OptionSource) -> str | None:
    method, _ = options.get_string("request")
    if method:
        return method.upper()
    if options.get_bool("get")[0]:
        return "GET"
    if options.get_bool("head")[0]:
        return "HEAD"
    return None


def resolve_url(options: OptionSource, args: Sequence[str] = ()) -> str | None:
    url, _ = options.get_string("url")
    if url:
        return url
    if args and args[0]:
        return args[0]
    return None


def _set_header(headers: list[Header], name: str, value: str) -> None:
    lowered = name.lower()
    headers[:] = [header for header in headers if header[0].lower() != lowered]
    headers.append((name, value))


def basic_authorization(username: str, password: str) -> str:
    """Return the ``Authorization`` value httpx sends for basic auth."""
    flow = httpx.BasicAuth(username, password).sync_auth_flow(
        httpx.Request("GET", "http://localhost")
    )
    return next(flow).headers["Authorization"]


def build_request(options: OptionSource, args: Sequence[str] = ()) -> RequestDescriptor:
    """Build a request descriptor from curl-style options.

    Args:
        options: Option source holding the flag values
        args: Positional command-line arguments; the first one is the URL
            when --url is not given

    Returns:
        The assembled request descriptor

    Raises:
        MissingRequiredFieldsError: If the method or URL cannot be resolved
        httpx.InvalidURL: If the URL is structurally invalid
    """
    method = resolve_method(options)
    url = resolve_url(options, args)
    if method is None or url is None:
        missing = tuple(
            field for field, value in (("method", method), ("url", url)) if value is None
        )
        raise MissingRequiredFieldsError(missing)

    body = resolve_body(options)
    content, synthetic = body.content, body.headers

    # --get moves the data into the query string
    force_get, _ = options.get_bool("get")
    if force_get and content:
        url = append_query(url, content)
        content, synthetic = "", ()

    # Raises httpx.InvalidURL for malformed URLs
    httpx.URL(url)

    headers: list[Header] = []

    if options.get_bool("compressed")[0]:
        _set_header(headers, "Accept-Encoding", "gzip, deflate, br")

    byte_range, _ = options.get_string("range")
    if byte_range:
        _set_header(headers, "Range", f"bytes={byte_range}")

    user_agent, _ = options.get_string("user-agent")
    if user_agent:
        _set_header(headers, "User-Agent", user_agent)

    user, _ = options.get_string("user")
    if user:
        credentials = parse_credentials(user)
        if credentials is None:
            logger.debug("Ignoring --user value without a colon")
        else:
            _set_header(headers, "Authorization", basic_authorization(*credentials))

    bearer, _ = options.get_string("oauth2-bearer")
    if bearer:
        _set_header(headers, "Authorization", f"Bearer {bearer}")

    referer, _ = options.get_string("referer")
    if referer:
        _set_header(headers, "Referer", referer)

    headers.extend(synthetic)
    raw_headers, _ = options.get_string_list("header")
    for raw in raw_headers:
        if not raw:
            continue
        header = parse_header(raw)
        if header is None:
            logger.debug(f"Skipping malformed header {raw!r}")
            continue
        headers.append(header)

    cookies: list[Header] = []
    raw_cookies, _ = options.get_string_list("cookie")
    for raw in raw_cookies:
        cookies.extend(parse_cookies(raw))

    logger.debug(f"Built request {method} {url}")
    return RequestDescriptor(
        method=method,
        url=url,
        headers=tuple(headers),
        cookies=tuple(cookies),
        body=content.encode("utf-8", "surrogateescape"),
    )
