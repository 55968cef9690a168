"""Error handling middleware for MCP requests."""

import logging
import traceback
from collections import defaultdict
from typing import Any

from fastmcp.server.middleware import Middleware, MiddlewareContext


class ErrorHandlingMiddleware(Middleware):
    """Logs failed MCP requests by exception type and re-raises them.

    Example:
        >>> server.add_middleware(ErrorHandlingMiddleware(include_traceback=True))
    """

    def __init__(
        self,
        logger: logging.Logger | None = None,
        include_traceback: bool = False,
    ) -> None:
        """Initialize error handling middleware.

        Args:
            logger: Optional custom logger.
            include_traceback: Whether to include full traceback in logs.
        """
        self.logger = logger or logging.getLogger(__name__)
        self.include_traceback = include_traceback
        self._error_counts: dict[str, int] = defaultdict(int)

    def get_error_stats(self) -> dict[str, int]:
        """Error counts keyed by exception type name."""
        return dict(self._error_counts)

    async def on_message(
        self,
        context: MiddlewareContext,
        call_next: Any,
    ) -> Any:
        """Handle errors during request processing.

        Raises:
            Exception: Re-raises the original exception after logging.
        """
        try:
            return await call_next(context)

        except Exception as e:
            error_type = type(e).__name__
            self._error_counts[error_type] += 1

            if self.include_traceback:
                self.logger.error(
                    "Error in %s: %s: %s\n%s",
                    context.method,
                    error_type,
                    e,
                    traceback.format_exc(),
                )
            else:
                self.logger.error("Error in %s: %s: %s", context.method, error_type, e)
            raise
