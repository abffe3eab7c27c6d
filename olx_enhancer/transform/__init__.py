"""Per-record transformation of listing records."""

from .offer_transformer import OfferTransformer

__all__ = ['OfferTransformer']
