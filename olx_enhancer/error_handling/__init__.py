"""
Error handling module for the OLX True Price Enhancer.

Provides the report-and-fail-over boundary used by both ingestion paths.
"""

from .failover import FailoverBoundary

__all__ = ['FailoverBoundary']
