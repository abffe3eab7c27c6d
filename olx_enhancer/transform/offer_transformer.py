"""
Per-record offer transformation.

Combines price calculation, field access, title patching and label
formatting into a single transformation of one raw listing record. The raw
record is deep-copied first; callers must use the returned payload as the
record's successor.
"""

import copy
import logging
from dataclasses import replace
from typing import Any, Dict, List, Mapping

from olx_enhancer.config.enhancer_config import EnhancerSettings
from olx_enhancer.formatting import format_label, patch_title
from olx_enhancer.models import AnnotatedListingRecord, RecordShape
from olx_enhancer.pricing import (
    base_price_of,
    category_id_of,
    compute_total,
    created_at_of,
    fee_of,
    is_business_of,
)


logger = logging.getLogger(__name__)


class OfferTransformer:
    """Annotates listing records with their true total price.

    Only records in the configured rent category get their fee looked up and
    their price label rewritten. Other records keep their price label and get
    a total equal to the rounded-up base price.

    Attributes:
        settings: Settings snapshot for this page load
    """

    def __init__(self, settings: EnhancerSettings):
        self.settings = settings

    def is_fee_category(self, record: Mapping[str, Any], shape: RecordShape) -> bool:
        """Check whether a record belongs to the configured rent category.

        Initial-state records without a category are only transformed on pages
        already known to be rent listings, so a missing category counts as a
        match there.
        """
        category_id = category_id_of(record)
        if category_id is None:
            return shape is RecordShape.INITIAL_STATE
        return category_id == self.settings.rent_category_id

    def transform(self, raw: Mapping[str, Any], shape: RecordShape) -> AnnotatedListingRecord:
        """Transform one raw listing record.

        Args:
            raw: Decoded listing record (left untouched)
            shape: Ingestion path the record came from

        Returns:
            AnnotatedListingRecord whose payload is the rewritten record
        """
        payload: Dict[str, Any] = copy.deepcopy(dict(raw))
        title = payload.get('title')

        base_price = base_price_of(payload)
        if base_price is None:
            logger.debug(f"Unresolved base price for listing {payload.get('id')!r}, skipping")
            return AnnotatedListingRecord(
                base_price=None,
                fee_amount=0,
                has_fee=False,
                true_total_price=None,
                is_business=is_business_of(payload),
                created_at=created_at_of(payload),
                title=title if isinstance(title, str) else "",
                display_label="",
                payload=payload,
            )

        in_fee_category = self.is_fee_category(payload, shape)
        prices = compute_total(base_price, fee_of(payload) if in_fee_category else None)

        new_title = patch_title(title, base_price, prices.has_fee, self.settings)
        if 'title' in payload:
            payload['title'] = new_title

        annotated = AnnotatedListingRecord(
            base_price=base_price,
            fee_amount=prices.fee_amount,
            has_fee=prices.has_fee,
            true_total_price=prices.total,
            is_business=is_business_of(payload),
            created_at=created_at_of(payload),
            title=new_title if isinstance(new_title, str) else "",
            display_label="",
            payload=payload,
        )
        annotated = replace(annotated, display_label=format_label(annotated, self.settings))

        if in_fee_category:
            self._write_label(payload, annotated.display_label, shape)

        return annotated

    def transform_batch(self, batch: List[Mapping[str, Any]], shape: RecordShape) -> List[AnnotatedListingRecord]:
        """Transform every record of a batch, preserving order.

        Entries that are not objects (e.g. ``null``) are carried through as is.
        """
        return [
            self.transform(raw, shape) if isinstance(raw, Mapping) else self._untouched(raw)
            for raw in batch
        ]

    def _untouched(self, entry: Any) -> AnnotatedListingRecord:
        return AnnotatedListingRecord(
            base_price=None,
            fee_amount=0,
            has_fee=False,
            true_total_price=None,
            is_business=None,
            created_at=None,
            title="",
            display_label="",
            payload=entry,
        )

    def _write_label(self, payload: Dict[str, Any], label: str, shape: RecordShape) -> None:
        if shape is RecordShape.NETWORK:
            params = payload.get('params')
            for param in params if isinstance(params, list) else []:
                if isinstance(param, dict) and param.get('key') == 'price':
                    value = param.get('value')
                    param['value'] = {**value, 'label': label} if isinstance(value, dict) else {'label': label}
                    return

        # Initial-state and pre-shaped records keep the label in the price block
        price_block = payload.get('price')
        if isinstance(price_block, dict):
            price_block['displayValue'] = label
