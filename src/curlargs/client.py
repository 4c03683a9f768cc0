"""Client configuration from curl-style options.

:func:`build_client` reads the connection-level flags (TLS, timeouts, proxy,
redirects) and returns an immutable :class:`ClientConfiguration`. Like curl,
and unlike most HTTP libraries, redirects are not followed unless
``--location`` is given.

Classes:
    RedirectMode: Whether and how far redirects are followed
    RedirectDecision: Outcome of a redirect check
    RedirectPolicy: Redirect rule consumed by the execution layer
    ClientConfiguration: TLS/timeout/proxy/redirect bundle

Example:
    Configure a client that follows at most five redirects::

        from curlargs import MappingOptionSource, build_client

        config = build_client(MappingOptionSource({
            "location": True,
            "max-redirs": 5,
            "max-time": 30.0,
        }))
        assert config.redirect_policy.max_redirects == 5
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import timedelta
from enum import Enum
from typing import Any

import httpx
from pydantic import BaseModel, ConfigDict, model_validator

from .errors import InvalidProxyError
from .options import OptionSource

logger = logging.getLogger(__name__)


class RedirectMode(str, Enum):
    """Whether and how far redirects are followed."""

    STOP = "stop"
    FOLLOW_ALL = "follow_all"
    FOLLOW_LIMITED = "follow_limited"


class RedirectDecision(str, Enum):
    """Outcome of a redirect check."""

    FOLLOW = "follow"
    USE_LAST_RESPONSE = "use_last_response"


class RedirectPolicy(BaseModel):
    """Redirect rule for the execution layer.

    Attributes:
        mode: Redirect mode (default: STOP, curl's behaviour without -L)
        max_redirects: Cap on requests for FOLLOW_LIMITED, None otherwise

    Example:
        Check a limited policy::

            policy = RedirectPolicy.limited(3)
            policy.check(2)  # RedirectDecision.FOLLOW
            policy.check(3)  # RedirectDecision.USE_LAST_RESPONSE

    Notes:
        ``check`` takes the number of requests already made in the exchange,
        the original request included. Reaching the cap hands back the last
        response rather than raising.
    """

    model_config = ConfigDict(frozen=True)

    mode: RedirectMode = RedirectMode.STOP
    max_redirects: int | None = None

    @model_validator(mode="after")
    def _check_limit(self) -> RedirectPolicy:
        if self.mode is RedirectMode.FOLLOW_LIMITED:
            if self.max_redirects is None or self.max_redirects < 1:
                raise ValueError("FOLLOW_LIMITED requires a positive max_redirects")
        elif self.max_redirects is not None:
            raise ValueError(f"max_redirects is only valid with FOLLOW_LIMITED, not {self.mode}")
        return self

    @classmethod
    def stop(cls) -> RedirectPolicy:
        return cls()

    @classmethod
    def follow_all(cls) -> RedirectPolicy:
        return cls(mode=RedirectMode.FOLLOW_ALL)

    @classmethod
    def limited(cls, max_redirects: int) -> RedirectPolicy:
        return cls(mode=RedirectMode.FOLLOW_LIMITED, max_redirects=max_redirects)

    def check(self, previous_requests: int) -> RedirectDecision:
        """Decide whether to follow the redirect just received."""
        if self.mode is RedirectMode.FOLLOW_ALL:
            return RedirectDecision.FOLLOW
        if self.mode is RedirectMode.FOLLOW_LIMITED and previous_requests < self.max_redirects:
            return RedirectDecision.FOLLOW
        return RedirectDecision.USE_LAST_RESPONSE


@dataclass(frozen=True)
class ClientConfiguration:
    """Connection-level settings for executing a request.

    Attributes:
        verify: Whether to verify TLS certificates (default: True)
        connect_timeout: Bound on connection establishment, None for the
            transport default
        timeout: Bound on the whole exchange, None for no limit
        proxy: Proxy URL all connections go through, if any
        redirect_policy: Redirect rule (default: do not follow)

    Notes:
        The configuration is immutable once created. Timeouts are declarative
        here; :class:`curlargs.http_client.CurlHTTPClient` enforces them.
    """

    verify: bool = True
    connect_timeout: timedelta | None = None
    timeout: timedelta | None = None
    proxy: str | None = None
    redirect_policy: RedirectPolicy = field(default_factory=RedirectPolicy.stop)

    def httpx_timeout(self) -> httpx.Timeout:
        total = self.timeout.total_seconds() if self.timeout is not None else None
        connect = (
            self.connect_timeout.total_seconds() if self.connect_timeout is not None else None
        )
        return httpx.Timeout(total, connect=connect)

    def httpx_options(self) -> dict[str, Any]:
        """Keyword arguments for ``httpx.AsyncClient``.

        Redirects are always left to the caller so the policy can hand back
        the last response instead of raising ``httpx.TooManyRedirects``.
        """
        return {
            "verify": self.verify,
            "timeout": self.httpx_timeout(),
            "proxy": self.proxy,
            "follow_redirects": False,
        }


def _seconds(options: OptionSource, name: str) -> timedelta | None:
    value, _ = options.get_float(name)
    if value > 0:
        return timedelta(seconds=value)
    return None


def parse_proxy(raw: str) -> str:
    """Validate a proxy URL.

    Raises:
        InvalidProxyError: If the URL has no scheme or host, or httpx
            cannot parse it
    """
    scheme, separator, _ = raw.partition("://")
    if not separator or not scheme:
        raise InvalidProxyError(raw, "missing protocol scheme")

    try:
        url = httpx.URL(raw)
    except httpx.InvalidURL as e:
        raise InvalidProxyError(raw, str(e)) from e

    if not url.host:
        raise InvalidProxyError(raw, "missing host")
    return raw


def build_redirect_policy(options: OptionSource) -> RedirectPolicy:
    location, _ = options.get_bool("location")
    if not location:
        return RedirectPolicy.stop()

    max_redirs, _ = options.get_int("max-redirs")
    if max_redirs > 0:
        return RedirectPolicy.limited(max_redirs)
    return RedirectPolicy.follow_all()


def build_client(options: OptionSource) -> ClientConfiguration:
    """Build a client configuration from curl-style options.

    Args:
        options: Option source holding the flag values

    Returns:
        The assembled client configuration

    Raises:
        InvalidProxyError: If --proxy is not a usable URL
    """
    insecure, _ = options.get_bool("insecure")

    proxy = None
    raw_proxy, _ = options.get_string("proxy")
    if raw_proxy:
        proxy = parse_proxy(raw_proxy)

    config = ClientConfiguration(
        verify=not insecure,
        connect_timeout=_seconds(options, "connect-timeout"),
        timeout=_seconds(options, "max-time"),
        proxy=proxy,
        redirect_policy=build_redirect_policy(options),
    )
    logger.debug(f"Built client configuration {config}")
    return config
