"""Proxy API models"""

from pydantic import BaseModel

from olx_enhancer.config.enhancer_config import EnhancerSettings
from olx_enhancer.models import RemovalCounts


class SettingsResponse(BaseModel):
    """Active settings snapshot"""
    rent_category_id: str
    show_rent_in_price_label: bool
    show_listing_age: bool
    show_base_price_in_title: bool
    show_seller_type: bool
    show_filter_indicator: bool
    filter_by_true_price: bool
    hide_agencies: bool
    debug: bool

    @classmethod
    def from_settings(cls, settings: EnhancerSettings) -> 'SettingsResponse':
        return cls(**{name: getattr(settings, name) for name in cls.model_fields})


class FilterCountsResponse(BaseModel):
    """Removal counts of the most recent batch"""
    by_price: int = 0
    by_agency: int = 0
    total: int = 0
    batches: int = 0

    @classmethod
    def from_counts(cls, counts: RemovalCounts, batches: int) -> 'FilterCountsResponse':
        return cls(**counts.to_dict(), batches=batches)


class HealthResponse(BaseModel):
    """Health check payload"""
    status: str
    version: str
