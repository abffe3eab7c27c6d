"""Base price suffix on listing titles."""

import math
import re
from typing import Any, Optional

from olx_enhancer.config.enhancer_config import ENHANCER_STRINGS, EnhancerSettings


BASE_PRICE_SUFFIX_PATTERN = re.compile(
    r'(?:\s*\(' + re.escape(ENHANCER_STRINGS["BASE_PRICE_LABEL"]) +
    r': -?\d+(?:[.,]\d+)? ' + re.escape(ENHANCER_STRINGS["CURRENCY"]) + r'\))+\s*$'
)


def strip_base_price_suffix(title: str) -> str:
    """Remove any base price suffix previously appended to a title."""
    return BASE_PRICE_SUFFIX_PATTERN.sub('', title)


def format_base_price_suffix(base_price: float) -> str:
    return f"({ENHANCER_STRINGS['BASE_PRICE_LABEL']}: {math.ceil(base_price)} {ENHANCER_STRINGS['CURRENCY']})"


def patch_title(
    title: Any,
    base_price: Optional[float],
    has_fee: bool,
    settings: EnhancerSettings
) -> Any:
    """Append the base price to a listing title.

    Any earlier suffix is stripped first, so patching the same title twice
    gives the same result as patching it once. The suffix is only added when
    the title toggle is on and the listing actually has a fee.

    Args:
        title: Listing title (non-strings are returned as is)
        base_price: Listed price before the fee
        has_fee: Whether a valid fee was found for the listing
        settings: Active enhancer settings

    Returns:
        Patched title
    """
    if not isinstance(title, str):
        return title

    stripped = strip_base_price_suffix(title)
    if not (settings.show_base_price_in_title and has_fee and base_price is not None):
        return stripped

    return f"{stripped.rstrip()} {format_base_price_suffix(base_price)}"
