"""
Initial state patching.

Applies the offer pipeline to the listing page's embedded initial state, once
and synchronously, before any API response is intercepted. Pages that are not
rent listings are left untouched.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from olx_enhancer.config.enhancer_config import EnhancerSettings
from olx_enhancer.error_handling import FailoverBoundary
from olx_enhancer.filtering import ListingFilter
from olx_enhancer.indicator import FilterIndicator, LoggingFilterIndicator
from olx_enhancer.interception.json_body import dump_json, load_json
from olx_enhancer.interception.prerendered_state import PrerenderedStateSlot
from olx_enhancer.models import PriceRange, RecordShape, RemovalCounts
from olx_enhancer.transform import OfferTransformer


logger = logging.getLogger(__name__)

RENTAL_BREADCRUMB_MARKER = 'wynajem'


@dataclass(frozen=True)
class StatePatchResult:
    """Initial state after patching.

    Attributes:
        state: Serialized state, the original string when nothing was patched
        patched: Whether the state was rewritten
        counts: Removal counts, None when nothing was patched
    """
    state: Optional[str]
    patched: bool = False
    counts: Optional[RemovalCounts] = None


class InitialStatePatcher:
    """Rewrites the ad list held by the page's initial state."""

    def __init__(self, settings: EnhancerSettings, indicator: Optional[FilterIndicator] = None):
        self.settings = settings
        self.indicator = indicator or LoggingFilterIndicator()
        self.transformer = OfferTransformer(settings)
        self.listing_filter = ListingFilter()
        self.boundary = FailoverBoundary('initial_state_patcher')

    def is_rental_page(self, state: Dict[str, Any]) -> bool:
        """Decide from the breadcrumbs whether the page lists rent offers."""
        breadcrumbs = (state.get('listing') or {}).get('breadcrumbs')
        if not isinstance(breadcrumbs, list):
            return False

        for crumb in breadcrumbs:
            if not isinstance(crumb, dict):
                continue
            category_id = crumb.get('category_id')
            if category_id is not None and str(category_id) == self.settings.rent_category_id:
                return True
            label = crumb.get('label')
            if isinstance(label, str) and RENTAL_BREADCRUMB_MARKER in label.lower():
                return True
        return False

    def patch(self, raw_state: Optional[str], price_range: PriceRange = PriceRange()) -> StatePatchResult:
        """Patch a serialized initial state.

        Args:
            raw_state: JSON document read from the page, may be None
            price_range: Active price range of the page

        Returns:
            StatePatchResult; on any error the original string is kept
        """
        if not raw_state:
            return StatePatchResult(state=raw_state)

        return self.boundary.run(
            self._patch,
            StatePatchResult(state=raw_state),
            raw_state, price_range,
        )

    def patch_document(self, html: str, price_range: PriceRange = PriceRange()) -> str:
        """Patch the initial state embedded in an HTML document.

        Returns:
            The document with a rewritten state slot, or the original document
        """
        def patch_slot(document: str) -> str:
            slot = PrerenderedStateSlot(document)
            if not slot.present:
                return document
            result = self.patch(slot.read(), price_range)
            if not result.patched:
                return document
            return slot.write(result.state)

        return self.boundary.run(patch_slot, html, html)

    def _patch(self, raw_state: str, price_range: PriceRange) -> StatePatchResult:
        state = load_json(raw_state)
        if not isinstance(state, dict) or not self.is_rental_page(state):
            return StatePatchResult(state=raw_state)

        listing = (state.get('listing') or {}).get('listing')
        ads = listing.get('ads') if isinstance(listing, dict) else None
        if not isinstance(ads, list):
            return StatePatchResult(state=raw_state)

        annotated = self.transformer.transform_batch(ads, RecordShape.INITIAL_STATE)
        if not self.settings.filter_by_true_price:
            price_range = PriceRange()
        result = self.listing_filter.apply(annotated, price_range, self.settings.hide_agencies)
        self.indicator.show(result.counts)

        patched_ads: List[Dict[str, Any]] = result.payloads
        listing['ads'] = patched_ads
        logger.debug(f"Initial state patched: {len(patched_ads)} of {len(ads)} ads kept")
        return StatePatchResult(
            state=dump_json(state),
            patched=True,
            counts=result.counts,
        )
