"""
Listing filter implementation for annotated listings.

This module provides filtering of annotated listings by seller type and by
true total price, counting how many listings each stage removed.
"""

from typing import List, Tuple
from olx_enhancer.models import AnnotatedListingRecord, FilterResult, PriceRange, RemovalCounts


class ListingFilter:
    """Filters annotated listings by seller type and true price.

    Stages run in a fixed order: agency sellers are removed first, then the
    price range is applied to what is left. The price count is therefore
    measured against the post-agency population.
    """

    def apply(
        self,
        batch: List[AnnotatedListingRecord],
        price_range: PriceRange,
        hide_agencies: bool
    ) -> FilterResult:
        """Filter a batch of annotated listings.

        Args:
            batch: Annotated listings in display order
            price_range: Inclusive true price bounds
            hide_agencies: Whether to remove business sellers

        Returns:
            FilterResult with the surviving listings and removal counts
        """
        survivors = list(batch)
        by_agency = 0
        by_price = 0

        if hide_agencies:
            survivors, by_agency = self.filter_agencies(survivors)

        if price_range.is_bounded:
            survivors, by_price = self.filter_by_price(survivors, price_range)

        return FilterResult(
            survivors=survivors,
            counts=RemovalCounts(by_price=by_price, by_agency=by_agency),
        )

    def filter_agencies(
        self,
        listings: List[AnnotatedListingRecord]
    ) -> Tuple[List[AnnotatedListingRecord], int]:
        """Remove listings from business sellers.

        Listings whose seller type is unknown are kept.

        Returns:
            Tuple of (remaining listings, number removed)
        """
        filtered = [listing for listing in listings if listing.is_business is not True]
        return filtered, len(listings) - len(filtered)

    def filter_by_price(
        self,
        listings: List[AnnotatedListingRecord],
        price_range: PriceRange
    ) -> Tuple[List[AnnotatedListingRecord], int]:
        """Filter listings by true total price.

        Listings without a computed total are never removed, since missing
        information must not hide a listing.

        Args:
            listings: Listings to filter
            price_range: Inclusive bounds, None meaning unbounded

        Returns:
            Tuple of (remaining listings, number removed)
        """
        filtered = []

        for listing in listings:
            total = listing.true_total_price

            if total is None or price_range.contains(total):
                filtered.append(listing)

        return filtered, len(listings) - len(filtered)
