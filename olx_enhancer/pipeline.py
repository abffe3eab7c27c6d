"""
Pipeline installation.

Captures one settings snapshot and wires it into both ingestion paths. The
initial state is patched first; the interceptor is only handed out after.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from olx_enhancer.config.enhancer_config import EnhancerSettings
from olx_enhancer.indicator import FilterIndicator, LoggingFilterIndicator, SilentFilterIndicator
from olx_enhancer.interception import (
    Fetcher,
    InitialStatePatcher,
    ResponseInterceptor,
    StatePatchResult,
)
from olx_enhancer.models import PriceRange


logger = logging.getLogger(__name__)


def configure_debug_logging(settings: EnhancerSettings) -> None:
    """Switch the package logger to DEBUG when the debug toggle is on."""
    if settings.debug:
        logging.getLogger('olx_enhancer').setLevel(logging.DEBUG)


@dataclass(frozen=True)
class InstalledPipeline:
    """Result of installing the pipeline for one page load."""
    initial_state: StatePatchResult
    interceptor: ResponseInterceptor


class EnhancerPipeline:
    """Both ingestion paths sharing one settings snapshot and indicator.

    Attributes:
        settings: Settings snapshot for this load
        indicator: Sink receiving removal counts
        state_patcher: Ingestion path for the initial state
    """

    def __init__(self, settings: EnhancerSettings, indicator: Optional[FilterIndicator] = None):
        self.settings = settings
        if not settings.show_filter_indicator:
            indicator = SilentFilterIndicator()
        self.indicator = indicator or LoggingFilterIndicator()
        self.state_patcher = InitialStatePatcher(settings, self.indicator)
        configure_debug_logging(settings)

    def interceptor_for(self, fetch: Fetcher) -> ResponseInterceptor:
        """Build a response interceptor around a fetcher."""
        return ResponseInterceptor(fetch, self.settings, self.indicator)

    def install(
        self,
        fetch: Fetcher,
        raw_state: Optional[str] = None,
        price_range: PriceRange = PriceRange()
    ) -> InstalledPipeline:
        """Patch the initial state, then start interception.

        Args:
            fetch: Fetcher used for live API calls
            raw_state: Serialized initial state of the page, if any
            price_range: Active price range of the page

        Returns:
            InstalledPipeline with the patched state and the interceptor
        """
        state = self.state_patcher.patch(raw_state, price_range)
        interceptor = self.interceptor_for(fetch)
        logger.debug("Pipeline installed, interception active")
        return InstalledPipeline(initial_state=state, interceptor=interceptor)
