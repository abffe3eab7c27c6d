"""
Price label and listing age formatting.

Builds the human-readable price label shown in place of the listing's
original price, e.g. ``✅ 2600 zł (Czynsz: 600 zł) | 🤵 Prywatne | Dodano: wczoraj``.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional, Union

from olx_enhancer.config.enhancer_config import ENHANCER_STRINGS, EnhancerSettings
from olx_enhancer.models import AnnotatedListingRecord


logger = logging.getLogger(__name__)

ONE_DAY = timedelta(days=1)
ONE_HOUR = timedelta(hours=1)


def _parse_timestamp(created_at: Union[str, datetime]) -> datetime:
    if isinstance(created_at, datetime):
        parsed = created_at
    else:
        text = str(created_at).strip()
        if text.endswith('Z'):
            text = text[:-1] + '+00:00'
        parsed = datetime.fromisoformat(text)

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def format_age(
    created_at: Optional[Union[str, datetime]],
    now: Optional[datetime] = None
) -> str:
    """Describe how long ago a listing was created, in Polish.

    Args:
        created_at: ISO-8601 timestamp or datetime (naive values are UTC)
        now: Reference time, defaults to the current UTC time

    Returns:
        Age string, or an empty string if the timestamp is missing or malformed
    """
    if not created_at:
        return ""

    try:
        created = _parse_timestamp(created_at)
    except (TypeError, ValueError) as e:
        logger.debug(f"Error parsing date for listing age: {created_at!r} ({e})")
        return ""

    if now is None:
        now = datetime.now(timezone.utc)
    elif now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)

    age = max(now - created, timedelta(0))
    days = age // ONE_DAY

    if days > 30:
        return "> miesiąc temu"
    if days > 1:
        return f"{days} dni temu"
    if days == 1:
        return "wczoraj"

    hours = age // ONE_HOUR
    if hours > 0:
        return f"{hours} godz. temu"
    return "dzisiaj"


def format_label(annotated: AnnotatedListingRecord, settings: EnhancerSettings) -> str:
    """Build the display label for an annotated listing.

    Segments, in order: status glyph, total price, fee (when shown and found),
    seller type (when shown and known), listing age (when shown and parseable).
    A gated segment without data is left out.

    Args:
        annotated: Listing with its computed prices
        settings: Active enhancer settings

    Returns:
        Label string with segments joined by spaces
    """
    strings = ENHANCER_STRINGS
    currency = strings["CURRENCY"]

    parts = [
        strings["SUCCESS_INDICATOR"] if annotated.has_fee else strings["WARNING_INDICATOR"],
        f"{annotated.true_total_price} {currency}",
    ]

    if settings.show_rent_in_price_label and annotated.has_fee:
        parts.append(f"({strings['RENT_LABEL']}: {annotated.fee_amount} {currency})")

    if settings.show_seller_type and annotated.is_business is not None:
        seller = strings["BUSINESS_SELLER_TEXT"] if annotated.is_business else strings["PRIVATE_SELLER_TEXT"]
        parts.append(f"| {seller}")

    if settings.show_listing_age:
        age = format_age(annotated.created_at)
        if age:
            parts.append(f"| {strings['ADDED_LABEL']}: {age}")

    return " ".join(parts)
