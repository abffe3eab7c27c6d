"""
Filter indicator sinks.

The pipeline reports removal counts after every processed batch, zero counts
included, so a sink can clear a stale summary. Rendering is up to the sink.
"""

import logging
from collections import deque
from typing import Deque, Optional, Protocol

from olx_enhancer.models import RemovalCounts


logger = logging.getLogger(__name__)


class FilterIndicator(Protocol):
    """Receives removal counts for each processed batch."""

    def show(self, counts: RemovalCounts) -> None:
        ...


class LoggingFilterIndicator:
    """Writes removal counts to the log."""

    def show(self, counts: RemovalCounts) -> None:
        if counts.total:
            logger.info(
                f"Hidden {counts.total} listing(s): "
                f"{counts.by_price} by price, {counts.by_agency} agency"
            )
        else:
            logger.debug("No listings hidden")


class RecordingFilterIndicator:
    """Keeps the most recent counts, optionally forwarding to another sink."""

    def __init__(self, forward_to: Optional[FilterIndicator] = None, history_size: int = 100):
        self.forward_to = forward_to
        self.history: Deque[RemovalCounts] = deque(maxlen=history_size)
        self.batches = 0

    @property
    def last(self) -> RemovalCounts:
        return self.history[-1] if self.history else RemovalCounts()

    def show(self, counts: RemovalCounts) -> None:
        self.history.append(counts)
        self.batches += 1
        if self.forward_to is not None:
            self.forward_to.show(counts)


class SilentFilterIndicator:
    """Sink used when the filter indicator is switched off."""

    def show(self, counts: RemovalCounts) -> None:
        pass
