"""
True price calculation.

Adds a recurring fee (rent) to a listing's base price. Totals are always
rounded up so the displayed price never understates the real cost.
"""

import math
from typing import Any, Optional

from olx_enhancer.models import CalculatedPrice


def parse_fee(raw_fee: Any) -> Optional[float]:
    """Parse a raw fee value into a positive number.

    Args:
        raw_fee: Fee as found in the listing (number, string or None)

    Returns:
        Fee as float, or None if it is absent, blank, unparseable or not positive
    """
    if raw_fee is None or isinstance(raw_fee, bool):
        return None

    text = str(raw_fee).strip()
    if not text:
        return None

    try:
        fee = float(text)
    except ValueError:
        return None

    if not math.isfinite(fee) or fee <= 0:
        return None
    return fee


def compute_total(base_price: float, raw_fee: Any) -> CalculatedPrice:
    """Compute the true total price for a listing.

    Args:
        base_price: Listed price
        raw_fee: Raw recurring fee value

    Returns:
        CalculatedPrice with the rounded-up total and fee
    """
    fee = parse_fee(raw_fee)
    if fee is not None and not math.isfinite(base_price + fee):
        fee = None
    if fee is None:
        return CalculatedPrice(total=math.ceil(base_price), fee_amount=0, has_fee=False)

    return CalculatedPrice(
        total=math.ceil(base_price + fee),
        fee_amount=math.ceil(fee),
        has_fee=True,
    )
