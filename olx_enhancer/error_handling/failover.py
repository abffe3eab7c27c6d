"""
Report-and-fail-over boundary for the ingestion paths.

Each ingestion path wraps its work in a FailoverBoundary: any unexpected
exception is logged with diagnostic context and the path falls back to the
untouched original value, so a failure never breaks the page.
"""

import logging
from datetime import datetime
from typing import Callable, TypeVar


# Configure logging
logger = logging.getLogger(__name__)

T = TypeVar('T')


class FailoverBoundary:
    """
    Outermost error boundary of one ingestion path.

    Attributes:
        path_name: Name of the ingestion path, used in log lines
        failures: Number of failovers since creation
    """

    def __init__(self, path_name: str):
        """
        Initialize the boundary.

        Args:
            path_name: Name of the ingestion path (e.g. "response_interceptor")
        """
        self.path_name = path_name
        self.failures = 0

    def run(
        self,
        operation: Callable[..., T],
        fallback: T,
        *args,
        **context
    ) -> T:
        """
        Execute operation, returning fallback if it raises.

        Args:
            operation: Callable doing the transformation work
            fallback: Value to return on failure (the original payload)
            *args: Positional arguments for the operation
            **context: Diagnostic context logged on failure (e.g. url)

        Returns:
            Result of the operation, or fallback if it raised
        """
        try:
            return operation(*args)
        except Exception as e:
            self.report(operation.__name__, e, context)
            return fallback

    def report(self, operation_name: str, error: Exception, context: dict) -> None:
        """
        Log a failure with timestamp, context, and diagnostic data.

        Args:
            operation_name: Name of the operation that failed
            error: The exception that occurred
            context: Diagnostic context of the failed call
        """
        self.failures += 1

        details = {
            'timestamp': datetime.now().isoformat(),
            'path': self.path_name,
            'operation': operation_name,
            'error_type': type(error).__name__,
            'error_message': str(error),
            'context': {k: str(v) for k, v in context.items()},
        }

        logger.error(
            f"Failing over in {self.path_name}: {operation_name} | "
            f"Error: {type(error).__name__}: {str(error)}"
        )
        logger.debug(f"Full error context: {details}", exc_info=error)
