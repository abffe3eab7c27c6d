"""
Data models for the OLX True Price Enhancer.

This module defines the core data structures used throughout the pipeline.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Optional


class RecordShape(Enum):
    """Which ingestion path a raw listing record came from."""
    NETWORK = "network"
    INITIAL_STATE = "initial_state"


@dataclass(frozen=True)
class CalculatedPrice:
    """Result of adding a recurring fee to a base price.

    Attributes:
        total: Base price plus fee, rounded up
        fee_amount: Fee rounded up, 0 when no valid fee was found
        has_fee: Whether a valid positive fee was found
    """
    total: int
    fee_amount: int
    has_fee: bool


@dataclass(frozen=True)
class AnnotatedListingRecord:
    """Derived view of one listing after the true price was computed.

    Attributes:
        base_price: Price as listed, None when it could not be resolved
        fee_amount: Recurring fee rounded up (0 when absent)
        has_fee: Whether a valid positive fee was found
        true_total_price: Rounded-up total, None only when base_price is None
        is_business: Seller type flag, None when unknown
        created_at: Raw creation timestamp, None when absent
        title: Patched listing title
        display_label: Human-readable price label
        payload: Rewritten successor of the raw record (non-object entries as is)
    """
    base_price: Optional[float]
    fee_amount: int
    has_fee: bool
    true_total_price: Optional[int]
    is_business: Optional[bool]
    created_at: Optional[str]
    title: str
    display_label: str
    payload: Any = field(default_factory=dict, compare=False, repr=False)


@dataclass(frozen=True)
class PriceRange:
    """Inclusive price bounds; a None bound is unbounded on that side."""
    from_price: Optional[int] = None
    to_price: Optional[int] = None

    @property
    def is_bounded(self) -> bool:
        """True when at least one bound is set."""
        return self.from_price is not None or self.to_price is not None

    def contains(self, price: float) -> bool:
        """Check whether a price falls inside the inclusive range.

        Args:
            price: Price to check

        Returns:
            True if the price satisfies every bound that is set
        """
        if self.from_price is not None and price < self.from_price:
            return False
        if self.to_price is not None and price > self.to_price:
            return False
        return True


@dataclass(frozen=True)
class RemovalCounts:
    """How many listings a filter pass removed, by reason."""
    by_price: int = 0
    by_agency: int = 0

    @property
    def total(self) -> int:
        return self.by_price + self.by_agency

    def to_dict(self) -> dict:
        """Convert counts to a dictionary for JSON serialization."""
        return {
            'by_price': self.by_price,
            'by_agency': self.by_agency,
            'total': self.total,
        }


@dataclass(frozen=True)
class FilterResult:
    """Listings that survived a filter pass plus the removal counts."""
    survivors: List[AnnotatedListingRecord]
    counts: RemovalCounts

    @property
    def payloads(self) -> List[Any]:
        """Rewritten raw records of the survivors, in batch order."""
        return [record.payload for record in self.survivors]
