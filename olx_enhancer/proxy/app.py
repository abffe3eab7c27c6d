"""
FastAPI rewriting proxy for the OLX True Price Enhancer.

The browser talks to this app instead of the marketplace. Listing pages have
their embedded initial state patched; listing API calls go through the
response interceptor; everything else is forwarded untouched.
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import Optional

import aiohttp
from fastapi import FastAPI, Request
from fastapi.responses import Response
from multidict import CIMultiDict

from olx_enhancer import __version__
from olx_enhancer.config.enhancer_config import (
    EnhancerSettings,
    ProxyConfig,
    get_enhancer_settings,
    get_proxy_config,
)
from olx_enhancer.filtering import price_range_from_url
from olx_enhancer.indicator import LoggingFilterIndicator, RecordingFilterIndicator
from olx_enhancer.interception import Fetcher, UpstreamRequest, UpstreamResponse
from olx_enhancer.pipeline import EnhancerPipeline
from olx_enhancer.proxy.fetcher import AiohttpFetcher
from olx_enhancer.proxy.schemas import FilterCountsResponse, HealthResponse, SettingsResponse


logger = logging.getLogger(__name__)

PROXY_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS", "HEAD"]

# Hop-by-hop headers are never forwarded in either direction
HOP_BY_HOP_HEADERS = (
    'connection', 'keep-alive', 'proxy-authenticate', 'proxy-authorization',
    'te', 'trailer', 'transfer-encoding', 'upgrade', 'host', 'content-length',
    'content-encoding',
)


def _forwardable(headers) -> CIMultiDict:
    return CIMultiDict([
        (key, value) for key, value in headers.items()
        if key.lower() not in HOP_BY_HOP_HEADERS
    ])


def build_upstream_request(request: Request, body: bytes, upstream_base_url: str) -> UpstreamRequest:
    """Translate an incoming proxy request into a marketplace call."""
    url = upstream_base_url.rstrip('/') + request.url.path
    if request.url.query:
        url = f"{url}?{request.url.query}"

    return UpstreamRequest(
        url=url,
        method=request.method,
        headers=_forwardable(request.headers),
        body=body or None,
        page_url=request.headers.get('referer'),
    )


def create_app(
    settings: Optional[EnhancerSettings] = None,
    proxy_config: Optional[ProxyConfig] = None,
    fetch: Optional[Fetcher] = None
) -> FastAPI:
    """Create the proxy application.

    The settings snapshot is captured here; changing settings requires a new
    app (a fresh load cycle).

    Args:
        settings: Enhancer settings, defaults to the environment configuration
        proxy_config: Proxy settings, defaults to the environment configuration
        fetch: Fetcher for marketplace calls, defaults to an AiohttpFetcher

    Returns:
        Configured FastAPI application
    """
    settings = settings or get_enhancer_settings()
    proxy_config = proxy_config or get_proxy_config()

    recorder = RecordingFilterIndicator(forward_to=LoggingFilterIndicator())
    pipeline = EnhancerPipeline(settings, recorder)

    owned_fetcher: Optional[AiohttpFetcher] = None
    if fetch is None:
        owned_fetcher = AiohttpFetcher(timeout_seconds=proxy_config.request_timeout_seconds)
        fetch = owned_fetcher
    interceptor = pipeline.interceptor_for(fetch)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Startup and shutdown events"""
        logger.info(f"Starting OLX Enhancer proxy for {proxy_config.upstream_base_url}...")
        logger.info(f"Using settings: {settings.to_mapping()}")

        yield

        logger.info("Shutting down OLX Enhancer proxy...")
        if owned_fetcher is not None:
            await owned_fetcher.close()

    app = FastAPI(
        title="OLX True Price Enhancer",
        description="Rewriting proxy showing true total prices of rent listings",
        version=__version__,
        lifespan=lifespan
    )
    app.state.pipeline = pipeline
    app.state.recorder = recorder

    @app.get("/health", response_model=HealthResponse)
    async def health_check():
        """Health check endpoint"""
        return HealthResponse(status="healthy", version=__version__)

    @app.get("/__enhancer__/settings", response_model=SettingsResponse)
    async def active_settings():
        """Settings snapshot used by this proxy"""
        return SettingsResponse.from_settings(settings)

    @app.get("/__enhancer__/filter-counts", response_model=FilterCountsResponse)
    async def filter_counts():
        """Removal counts of the most recent batch"""
        return FilterCountsResponse.from_counts(recorder.last, recorder.batches)

    @app.api_route("/{path:path}", methods=PROXY_METHODS)
    async def proxy(path: str, request: Request):
        """Forward a request to the marketplace"""
        upstream_request = build_upstream_request(request, await request.body(), proxy_config.upstream_base_url)

        try:
            response = await interceptor(upstream_request)
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.error(f"Upstream call failed: {upstream_request.method} {upstream_request.url}: {e}")
            return Response(content=f"Upstream error: {e}", status_code=502, media_type="text/plain")

        if response.ok and response.content_type == 'text/html':
            response = patch_page(pipeline, upstream_request, response)

        proxied = Response(content=response.body, status_code=response.status)
        headers = _rewrite_location(_forwardable(response.headers), proxy_config.upstream_base_url)
        for key, value in headers.items():
            proxied.headers.append(key, value)
        return proxied

    return app


def patch_page(pipeline: EnhancerPipeline, request: UpstreamRequest, response: UpstreamResponse) -> UpstreamResponse:
    """Patch the initial state of a listing page response."""
    try:
        html = response.body.decode('utf-8')
    except UnicodeDecodeError:
        logger.debug(f"Page {request.url} is not UTF-8, leaving it untouched")
        return response

    patched = pipeline.state_patcher.patch_document(html, price_range_from_url(request.url))
    if patched == html:
        return response
    return response.with_body(patched.encode('utf-8'))


def _rewrite_location(headers: CIMultiDict, upstream_base_url: str) -> CIMultiDict:
    base = upstream_base_url.rstrip('/')
    rewritten = CIMultiDict()
    for key, value in headers.items():
        if key.lower() == 'location' and value.startswith(base):
            value = value[len(base):] or '/'
        rewritten.add(key, value)
    return rewritten
