"""Async execution of request descriptors."""

from __future__ import annotations

import asyncio
import logging

import httpx

from .client import ClientConfiguration, RedirectDecision, RedirectMode
from .request import RequestDescriptor

logger = logging.getLogger(__name__)


class CurlHTTPClient:
    """HTTP client that executes requests the way curl would, using httpx.

    The redirect policy and the overall timeout of the configuration are
    enforced here; everything else is passed to ``httpx.AsyncClient``.

    Example:
        async with CurlHTTPClient(build_client(options)) as client:
            response = await client.send(build_request(options, args))
    """

    def __init__(
        self,
        config: ClientConfiguration,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.config = config
        self._client = httpx.AsyncClient(transport=transport, **config.httpx_options())

    async def __aenter__(self):
        """Enter async context."""
        await self._client.__aenter__()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Exit async context."""
        await self._client.__aexit__(exc_type, exc_val, exc_tb)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def send(self, request: RequestDescriptor | httpx.Request) -> httpx.Response:
        """Send a request, following redirects as the policy allows.

        Raises:
            httpx.TimeoutException: If the overall timeout expires
            httpx.HTTPError: For any other transport failure
        """
        if isinstance(request, RequestDescriptor):
            request = request.to_httpx()

        if self.config.timeout is None:
            return await self._send_with_redirects(request)

        seconds = self.config.timeout.total_seconds()
        try:
            return await asyncio.wait_for(self._send_with_redirects(request), seconds)
        except asyncio.TimeoutError as e:
            raise httpx.TimeoutException(
                f"Operation timed out after {seconds:g} seconds", request=request
            ) from e

    async def _send_with_redirects(self, request: httpx.Request) -> httpx.Response:
        policy = self.config.redirect_policy
        logger.debug(f"Sending {request.method} {request.url}")

        if policy.mode is RedirectMode.FOLLOW_ALL:
            return await self._client.send(request, follow_redirects=True)

        response = await self._client.send(request)
        sent = 1
        while response.next_request is not None:
            if policy.check(sent) is not RedirectDecision.FOLLOW:
                break
            next_request = response.next_request
            await response.aclose()
            logger.debug(f"Following redirect to {next_request.url}")
            response = await self._client.send(next_request)
            sent += 1
        return response
