"""
Ingestion paths for listing records.

Live API responses go through the ResponseInterceptor; the page's embedded
initial state goes through the InitialStatePatcher.
"""

from .initial_state_patcher import InitialStatePatcher, StatePatchResult
from .messages import Fetcher, UpstreamRequest, UpstreamResponse
from .prerendered_state import PrerenderedStateSlot
from .response_interceptor import (
    InterceptionResult,
    InterceptionState,
    ResponseInterceptor,
    default_price_range_source,
    match_endpoint,
)

__all__ = [
    'Fetcher',
    'InitialStatePatcher',
    'InterceptionResult',
    'InterceptionState',
    'PrerenderedStateSlot',
    'ResponseInterceptor',
    'StatePatchResult',
    'UpstreamRequest',
    'UpstreamResponse',
    'default_price_range_source',
    'match_endpoint',
]
