"""
aiohttp fetcher for marketplace calls.

Owns one ClientSession for the lifetime of the proxy and turns aiohttp
responses into fully read UpstreamResponse values.
"""

import logging
from typing import Optional

import aiohttp
from multidict import CIMultiDict

from olx_enhancer.interception.messages import STALE_BODY_HEADERS, UpstreamRequest, UpstreamResponse


logger = logging.getLogger(__name__)

# Bodies are always decompressed by aiohttp, so only ask for what it can decode
ACCEPT_ENCODING = "gzip, deflate"


class AiohttpFetcher:
    """Fetches UpstreamRequests with a shared aiohttp session."""

    def __init__(self, timeout_seconds: float = 30.0):
        self.timeout = aiohttp.ClientTimeout(total=timeout_seconds)
        self._session: Optional[aiohttp.ClientSession] = None

    async def __aenter__(self):
        await self._ensure_session()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def _ensure_session(self):
        """Ensure we have an open session"""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(timeout=self.timeout, auto_decompress=True)

    async def close(self):
        """Explicitly close the session when done"""
        if self._session and not self._session.closed:
            await self._session.close()
            self._session = None

    async def __call__(self, request: UpstreamRequest) -> UpstreamResponse:
        await self._ensure_session()

        headers = CIMultiDict(request.headers)
        headers["Accept-Encoding"] = ACCEPT_ENCODING

        async with self._session.request(
            request.method,
            request.url,
            headers=headers,
            data=request.body,
            allow_redirects=False,
        ) as response:
            body = await response.read()
            logger.debug(f"{request.method} {request.url} -> {response.status} ({len(body)} bytes)")
            return UpstreamResponse(
                status=response.status,
                reason=response.reason or "",
                headers=CIMultiDict([
                    (key, value) for key, value in response.headers.items()
                    if key.lower() not in STALE_BODY_HEADERS
                ]),
                body=body,
            )
