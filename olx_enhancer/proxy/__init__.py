"""Rewriting proxy serving the enhanced marketplace pages."""

from .app import build_upstream_request, create_app
from .fetcher import AiohttpFetcher

__all__ = ['AiohttpFetcher', 'build_upstream_request', 'create_app']
