"""
Pricing module for listing records.

Computes true total prices and resolves typed fields out of the raw record
shapes used by the API responses and the page's initial state.
"""

from .price_calculator import compute_total, parse_fee
from .record_accessor import (
    base_price_of,
    category_id_of,
    created_at_of,
    fee_of,
    find_param,
    find_param_entry,
    is_business_of,
)

__all__ = [
    'base_price_of',
    'category_id_of',
    'compute_total',
    'created_at_of',
    'fee_of',
    'find_param',
    'find_param_entry',
    'is_business_of',
    'parse_fee',
]
