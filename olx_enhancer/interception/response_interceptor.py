"""
Live API response interception.

Wraps the fetcher used to reach the marketplace. Listing search responses
(the GraphQL search endpoint and the REST offers endpoint) are decoded,
threaded through the offer transformer and the listing filter, and replaced
by the rewritten JSON. Anything else is forwarded unmodified.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Tuple
from urllib.parse import parse_qs, urlsplit

from olx_enhancer.config.enhancer_config import EnhancerSettings
from olx_enhancer.error_handling import FailoverBoundary
from olx_enhancer.filtering import ListingFilter, price_range_from_url
from olx_enhancer.indicator import FilterIndicator, LoggingFilterIndicator
from olx_enhancer.interception.json_body import dump_json, load_json
from olx_enhancer.interception.messages import Fetcher, UpstreamRequest, UpstreamResponse
from olx_enhancer.models import PriceRange, RecordShape
from olx_enhancer.pricing import category_id_of
from olx_enhancer.transform import OfferTransformer


logger = logging.getLogger(__name__)

GRAPHQL_PATH = '/apigateway/graphql'
REST_OFFERS_PATH = '/api/v1/offers'
GRAPHQL_SEARCH_FIELDS = ('clientCompatibleListings',)
RENTAL_PAGE_MARKER = '/wynajem'


class InterceptionState(Enum):
    """State of one intercepted call.

    INTERCEPTED is held while a matched call awaits its response; every call
    ends in one of the terminal states.
    """
    PASSTHROUGH = "passthrough"
    INTERCEPTED = "intercepted"
    TRANSFORMED = "transformed"
    FAILSAFE = "failsafe"

    @property
    def terminal(self) -> bool:
        return self is not InterceptionState.INTERCEPTED


class Endpoint(Enum):
    GRAPHQL = "graphql"
    REST_OFFERS = "rest_offers"


@dataclass(frozen=True)
class InterceptionResult:
    state: InterceptionState
    response: UpstreamResponse


def match_endpoint(path: str) -> Optional[Endpoint]:
    """Recognize the listing endpoint family a request path belongs to."""
    if GRAPHQL_PATH in path:
        return Endpoint.GRAPHQL
    if REST_OFFERS_PATH in path:
        return Endpoint.REST_OFFERS
    return None


def default_price_range_source(request: UpstreamRequest) -> PriceRange:
    """Read the price range from the calling page, falling back to the call itself."""
    page_range = price_range_from_url(request.page_url)
    if page_range.is_bounded:
        return page_range
    return price_range_from_url(request.url)


class ResponseInterceptor:
    """Rewrites listing search responses before they reach the page.

    Attributes:
        fetch: Underlying async fetcher
        settings: Settings snapshot captured at installation
        indicator: Sink receiving removal counts per batch
        price_range_source: Reads the active price range for a request
    """

    def __init__(
        self,
        fetch: Fetcher,
        settings: EnhancerSettings,
        indicator: Optional[FilterIndicator] = None,
        price_range_source: Callable[[UpstreamRequest], PriceRange] = default_price_range_source
    ):
        self.fetch = fetch
        self.settings = settings
        self.indicator = indicator or LoggingFilterIndicator()
        self.price_range_source = price_range_source
        self.transformer = OfferTransformer(settings)
        self.listing_filter = ListingFilter()
        self.boundary = FailoverBoundary('response_interceptor')

    async def __call__(self, request: UpstreamRequest) -> UpstreamResponse:
        result = await self.intercept(request)
        return result.response

    async def intercept(self, request: UpstreamRequest) -> InterceptionResult:
        """Forward a request and rewrite the response when it is a listing batch.

        Errors raised by the underlying fetch propagate unchanged, exactly as
        they would without interception.

        Args:
            request: Outgoing call

        Returns:
            InterceptionResult with the terminal state and the response to use
        """
        endpoint = match_endpoint(request.path)
        if endpoint is None:
            return InterceptionResult(InterceptionState.PASSTHROUGH, await self.fetch(request))

        logger.debug(f"{InterceptionState.INTERCEPTED.value}: {endpoint.value} call {request.url}")
        response = await self.fetch(request)
        if not response.ok or not response.body:
            return InterceptionResult(InterceptionState.PASSTHROUGH, response)

        outcome = self.boundary.run(
            self._rewrite,
            (InterceptionState.FAILSAFE, response),
            request, response, endpoint,
            url=request.url,
        )
        state, final = outcome
        return InterceptionResult(state, final)

    def _rewrite(
        self,
        request: UpstreamRequest,
        response: UpstreamResponse,
        endpoint: Endpoint
    ) -> Tuple[InterceptionState, UpstreamResponse]:
        body = load_json(response.body)

        located = self._locate_batch(body, endpoint)
        if located is None:
            logger.debug(f"Response of {request.url} is not a listing batch, passing through")
            return InterceptionState.PASSTHROUGH, response

        container, key = located
        offers = container[key]
        if not offers:
            return InterceptionState.PASSTHROUGH, response

        if not self._applies_to(request, offers):
            logger.debug(f"No rent listings in {request.url}, passing through")
            return InterceptionState.PASSTHROUGH, response

        logger.debug(f"Processing {endpoint.value} response, offers found: {len(offers)}")
        annotated = self.transformer.transform_batch(offers, RecordShape.NETWORK)

        price_range = self.price_range_source(request) if self.settings.filter_by_true_price else PriceRange()
        result = self.listing_filter.apply(annotated, price_range, self.settings.hide_agencies)
        self.indicator.show(result.counts)

        # The decoded body is private to this call, so the batch is swapped in place
        container[key] = result.payloads
        rewritten = dump_json(body).encode('utf-8')
        logger.debug(f"Modified data prepared for: {request.url}")
        return InterceptionState.TRANSFORMED, response.with_body(rewritten)

    def _locate_batch(self, body: Any, endpoint: Endpoint) -> Optional[Tuple[Dict[str, Any], str]]:
        if not isinstance(body, dict):
            return None
        data = body.get('data')

        if endpoint is Endpoint.GRAPHQL:
            if not isinstance(data, dict):
                return None
            for search_field in GRAPHQL_SEARCH_FIELDS:
                listings = data.get(search_field)
                if isinstance(listings, dict) and isinstance(listings.get('data'), list):
                    return listings, 'data'
            return None

        if isinstance(data, list):
            return body, 'data'
        return None

    def _applies_to(self, request: UpstreamRequest, offers: List[Any]) -> bool:
        rent_category_id = self.settings.rent_category_id
        if any(isinstance(o, dict) and category_id_of(o) == rent_category_id for o in offers):
            return True

        page_path = urlsplit(request.page_url).path if request.page_url else ''
        if RENTAL_PAGE_MARKER in page_path:
            return True

        category_ids = parse_qs(urlsplit(request.url).query).get('category_id', [])
        return rent_category_id in category_ids
