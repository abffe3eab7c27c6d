"""
Property-based tests for error handling.

These tests verify that the failover boundary never lets an exception escape
and always hands back the original value when the work fails.
"""

import logging

import pytest
from hypothesis import given, settings, strategies as st

from olx_enhancer.error_handling import FailoverBoundary


# Strategy for generating original payloads
payloads = st.one_of(st.text(max_size=200), st.binary(max_size=200), st.none())

# Strategy for generating exception types raised by the work
exception_types = st.sampled_from([ValueError, KeyError, TypeError, RuntimeError, AttributeError])


@given(original=payloads, error_type=exception_types, message=st.text(max_size=50))
@settings(max_examples=100)
def test_failure_returns_original(original, error_type, message):
    """
    **Property: Failover to original**

    For any exception raised by the work, the boundary returns the fallback
    unchanged and counts one failure.
    """
    boundary = FailoverBoundary("test_path")

    def failing_operation(value):
        raise error_type(message)

    result = boundary.run(failing_operation, original, original)

    assert result is original
    assert boundary.failures == 1


@given(value=st.integers())
@settings(max_examples=100)
def test_success_returns_operation_result(value):
    """A successful operation's result is returned and no failure is counted."""
    boundary = FailoverBoundary("test_path")

    result = boundary.run(lambda v: v * 2, None, value)

    assert result == value * 2
    assert boundary.failures == 0


def test_failure_is_logged_with_context(caplog):
    boundary = FailoverBoundary("response_interceptor")

    def rewrite(body):
        raise ValueError("bad body")

    with caplog.at_level(logging.DEBUG, logger="olx_enhancer.error_handling.failover"):
        boundary.run(rewrite, b"original", b"{", url="https://www.olx.pl/api/v1/offers/")

    errors = [r for r in caplog.records if r.levelno == logging.ERROR]
    assert len(errors) == 1
    assert "response_interceptor" in errors[0].getMessage()
    assert "rewrite" in errors[0].getMessage()
    assert "ValueError: bad body" in errors[0].getMessage()
    assert any("https://www.olx.pl/api/v1/offers/" in r.getMessage() for r in caplog.records)


def test_base_exceptions_are_not_swallowed():
    boundary = FailoverBoundary("test_path")

    def interrupted():
        raise KeyboardInterrupt

    with pytest.raises(KeyboardInterrupt):
        boundary.run(interrupted, None)
