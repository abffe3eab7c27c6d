"""Display text formatting for annotated listings."""

from .label_formatter import format_age, format_label
from .title_patcher import patch_title, strip_base_price_suffix

__all__ = ['format_age', 'format_label', 'patch_title', 'strip_base_price_suffix']
