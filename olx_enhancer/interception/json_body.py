"""
JSON decoding for listing documents.

Number literals too large for a float (``1e400``) are kept as exact integers
instead of becoming ``inf``, so a rewritten document serializes back to valid
JSON with the same values.
"""

import json
import math
from decimal import Decimal
from typing import Any, Union


# Longer integers could not be serialized back (sys.int_info.default_max_str_digits)
MAX_INTEGER_DIGITS = 4000


def _parse_float(text: str) -> Union[float, int]:
    value = float(text)
    if not math.isinf(value):
        return value

    exact = Decimal(text)
    if exact.adjusted() >= MAX_INTEGER_DIGITS:
        raise ValueError(f"Number literal out of range: {text[:20]}")
    return int(exact)


def load_json(document: Union[str, bytes]) -> Any:
    """Decode a listing document.

    Raises:
        ValueError: If the document is not valid JSON
    """
    return json.loads(document, parse_float=_parse_float)


def dump_json(value: Any) -> str:
    return json.dumps(value, ensure_ascii=False)
