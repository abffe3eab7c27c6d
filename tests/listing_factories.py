"""
Builders for raw listing records in the shapes the marketplace sends.

Network records follow the REST/GraphQL offers responses; initial-state ads
and pages follow the ``__PRERENDERED_STATE__`` document.
"""

import json
from typing import List, Optional

from olx_enhancer.models import AnnotatedListingRecord


RENT_CATEGORY_ID = 15
OTHER_CATEGORY_ID = 1307


def network_offer(
    offer_id: int = 1,
    price=2000,
    rent="600",
    category_id: Optional[int] = RENT_CATEGORY_ID,
    title: str = "Mieszkanie 2 pokoje, Mokotów",
    business: Optional[bool] = False,
    created_time: Optional[str] = "2024-05-01T10:00:00+02:00",
) -> dict:
    params = []
    if price is not None:
        params.append({
            "key": "price",
            "name": "Cena",
            "type": "price",
            "value": {"value": price, "type": "price", "currency": "PLN", "label": f"{price} zł"},
        })
    params.append({"key": "m", "name": "Powierzchnia", "type": "input", "value": {"key": "48", "label": "48 m²"}})
    if rent is not None:
        params.append({
            "key": "rent",
            "name": "Czynsz (dodatkowo)",
            "type": "input",
            "value": {"key": rent, "label": f"{rent} zł"},
        })

    offer = {
        "id": offer_id,
        "url": f"https://www.olx.pl/d/oferta/mieszkanie-{offer_id}.html",
        "title": title,
        "params": params,
    }
    if category_id is not None:
        offer["category"] = {"id": category_id, "type": "real_estate"}
    if business is not None:
        offer["business"] = business
    if created_time is not None:
        offer["created_time"] = created_time
    return offer


def initial_state_ad(
    ad_id: int = 1,
    price=2000,
    rent="600",
    category_id: Optional[int] = None,
    title: str = "Kawalerka przy metrze",
    is_business: Optional[bool] = False,
    created_time: Optional[str] = "2024-05-01T10:00:00+02:00",
) -> dict:
    ad = {
        "id": ad_id,
        "title": title,
        "price": {
            "displayValue": f"{price} zł",
            "regularPrice": {"value": price, "currencyCode": "PLN"},
        },
        "params": [
            {"key": "m", "name": "Powierzchnia", "value": "30 m²", "normalizedValue": "30"},
        ],
    }
    if rent is not None:
        ad["params"].append({"key": "rent", "name": "Czynsz (dodatkowo)", "value": f"{rent} zł", "normalizedValue": rent})
    if category_id is not None:
        ad["category"] = {"id": category_id}
    if is_business is not None:
        ad["isBusiness"] = is_business
    if created_time is not None:
        ad["createdTime"] = created_time
    return ad


def initial_state(ads: List[dict], rental: bool = True) -> dict:
    if rental:
        breadcrumbs = [
            {"label": "Nieruchomości", "category_id": 3},
            {"label": "Mieszkania", "category_id": 14},
            {"label": "Wynajem", "category_id": RENT_CATEGORY_ID},
        ]
    else:
        breadcrumbs = [
            {"label": "Motoryzacja", "category_id": 5},
            {"label": "Samochody osobowe", "category_id": 84},
        ]
    return {"listing": {"breadcrumbs": breadcrumbs, "listing": {"ads": ads, "totalElements": len(ads)}}}


def listing_page(state: dict) -> str:
    literal = json.dumps(json.dumps(state, ensure_ascii=False), ensure_ascii=False)
    return (
        "<!DOCTYPE html><html><head><title>Mieszkania na wynajem</title></head><body>"
        '<div id="root"></div>'
        f"<script>window.__PRERENDERED_STATE__= {literal};\nwindow.__TAURUS__ = {{}};</script>"
        "</body></html>"
    )


def annotated(
    total: Optional[int],
    is_business: Optional[bool] = None,
    title: str = "Oferta",
) -> AnnotatedListingRecord:
    return AnnotatedListingRecord(
        base_price=None if total is None else float(total),
        fee_amount=0,
        has_fee=False,
        true_total_price=total,
        is_business=is_business,
        created_at=None,
        title=title,
        display_label="",
        payload={"title": title, "total": total},
    )
