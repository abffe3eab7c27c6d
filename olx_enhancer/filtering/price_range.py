"""
Price range input parsing.

The active price range comes from the page's query controls: the listing
page URL carries ``search[filter_float_price:from]`` / ``:to`` and the REST
offers endpoint carries ``filter_float_price:from`` / ``:to``.
"""

import re
from typing import Any, Mapping, Optional
from urllib.parse import parse_qsl, urlsplit

from olx_enhancer.models import PriceRange


FROM_KEYS = ('search[filter_float_price:from]', 'filter_float_price:from')
TO_KEYS = ('search[filter_float_price:to]', 'filter_float_price:to')

# Unicode whitespace covers no-break and thin spaces used as thousands separators
GROUPING_PATTERN = re.compile(r'\s+')


def parse_price_bound(value: Any) -> Optional[int]:
    """Parse one price bound typed by the user.

    Args:
        value: Raw bound text, e.g. "2 500"

    Returns:
        Non-negative integer, or None when absent or malformed
    """
    if value is None:
        return None

    text = GROUPING_PATTERN.sub('', str(value))
    if not text.isascii() or not text.isdigit():
        return None
    return int(text)


def _first_bound(query: Mapping[str, Any], keys) -> Optional[int]:
    bounds = (parse_price_bound(query[key]) for key in keys if key in query)
    return next((bound for bound in bounds if bound is not None), None)


def price_range_from_query(query: Mapping[str, Any]) -> PriceRange:
    """Build a PriceRange from query parameters.

    The first well-formed bound among the known keys wins; malformed ones
    are skipped.
    """
    from_price = _first_bound(query, FROM_KEYS)
    to_price = _first_bound(query, TO_KEYS)
    return PriceRange(from_price=from_price, to_price=to_price)


def price_range_from_url(url: Optional[str]) -> PriceRange:
    """Build a PriceRange from the query string of a page or API URL."""
    if not url:
        return PriceRange()
    query = dict(parse_qsl(urlsplit(url).query, keep_blank_values=True))
    return price_range_from_query(query)
