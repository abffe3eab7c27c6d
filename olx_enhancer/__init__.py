"""OLX True Price Enhancer: true total prices for rent listings."""

__version__ = "1.1.0"
