"""
Filtering module for annotated listings.

This module provides functionality to filter annotated listings by seller
type and true total price, and to read the active price range.
"""

from .listing_filter import ListingFilter
from .price_range import parse_price_bound, price_range_from_query, price_range_from_url

__all__ = ['ListingFilter', 'parse_price_bound', 'price_range_from_query', 'price_range_from_url']
