"""
Typed field access over raw listing records.

The same logical field is represented differently across the GraphQL
response, the REST offers endpoint and the page's initial state. All lookups
go through this module so each shape resolves to the same values.
"""

import math
from typing import Any, Mapping, Optional, Sequence


def _get(mapping: Any, key: str) -> Any:
    if isinstance(mapping, Mapping):
        return mapping.get(key)
    return None


def _is_number(value: Any) -> bool:
    if not isinstance(value, (int, float)) or isinstance(value, bool):
        return False
    try:
        return math.isfinite(value)
    except OverflowError:
        # int too large for a float
        return False


def find_param_entry(params: Any, key: str) -> Optional[Mapping[str, Any]]:
    """Return the first parameter entry whose key matches, or None."""
    if not isinstance(params, Sequence) or isinstance(params, (str, bytes)):
        return None
    for param in params:
        if _get(param, 'key') == key:
            return param
    return None


def find_param(params: Any, key: str) -> Any:
    """Look up a parameter value by key.

    The value is resolved by precedence: nested ``value.value``, nested
    ``value.key``, nested ``value.label``, top-level ``normalizedValue``, then
    the raw ``value`` field. The first non-None result wins.

    Args:
        params: List of parameter entries
        key: Parameter key to find (e.g. "price", "rent")

    Returns:
        Resolved value, or None if the parameter is missing
    """
    param = find_param_entry(params, key)
    if param is None:
        return None

    value = param.get('value')
    for candidate in (
        _get(value, 'value'),
        _get(value, 'key'),
        _get(value, 'label'),
        param.get('normalizedValue'),
        value,
    ):
        if candidate is not None:
            return candidate
    return None


def base_price_of(record: Mapping[str, Any]) -> Optional[float]:
    """Resolve the numeric base price of a listing record.

    Network records carry it as the ``price`` parameter; initial-state and
    pre-shaped records carry it in ``price.regularPrice.value``.

    Returns:
        Base price, or None if it is missing or not numeric
    """
    from_param = find_param(record.get('params'), 'price')
    if _is_number(from_param):
        return from_param

    from_block = _get(_get(record.get('price'), 'regularPrice'), 'value')
    if _is_number(from_block):
        return from_block
    return None


def fee_of(record: Mapping[str, Any]) -> Any:
    """Raw recurring fee (rent) parameter value."""
    return find_param(record.get('params'), 'rent')


def category_id_of(record: Mapping[str, Any]) -> Optional[str]:
    """Category identifier as a string, or None when absent."""
    category_id = _get(record.get('category'), 'id')
    if category_id is None:
        category_id = record.get('category_id')
    if category_id is None:
        return None
    return str(category_id)


def is_business_of(record: Mapping[str, Any]) -> Optional[bool]:
    """Seller type flag; None unless the record states it as a boolean."""
    for key in ('business', 'isBusiness'):
        value = record.get(key)
        if isinstance(value, bool):
            return value
    return None


def created_at_of(record: Mapping[str, Any]) -> Optional[str]:
    """Raw creation timestamp, or None when absent."""
    for key in ('created_time', 'createdTime'):
        value = record.get(key)
        if value:
            return value
    return None
