"""Exception hierarchy for request and client assembly.

Exception Hierarchy:
    CurlArgsError: Base exception for all curlargs errors
    ├── MissingRequiredFieldsError: Method and/or URL could not be resolved
    └── InvalidProxyError: Proxy URL was rejected

Malformed auxiliary values (headers, cookies, credentials) never raise; they
are skipped by the builders. Malformed request URLs surface as the
``httpx.InvalidURL`` raised by httpx itself.

Example:
    >>> try:
    ...     request = build_request(options, args)
    ... except MissingRequiredFieldsError as e:
    ...     print(f"Missing: {', '.join(e.missing)}")
"""

from __future__ import annotations


class CurlArgsError(Exception):
    """Base exception for all curlargs errors."""

    pass


class MissingRequiredFieldsError(CurlArgsError):
    """Raised when the request method or URL cannot be resolved.

    The message is stable so command-line tools can match on it and print
    guidance such as "specify --request and --url".
    """

    def __init__(self, missing: tuple[str, ...] = ("method", "url")):
        super().__init__("missing required fields: method and url")
        self.missing = missing


class InvalidProxyError(CurlArgsError, ValueError):
    """Raised when the proxy option is not a usable proxy URL."""

    def __init__(self, proxy: str, reason: str):
        super().__init__(f"invalid proxy URL {proxy!r}: {reason}")
        self.proxy = proxy
        self.reason = reason
