"""Logging middleware for tool calls."""

import logging
import time
from typing import Any

from fastmcp.server.middleware import Middleware, MiddlewareContext


class LoggingMiddleware(Middleware):
    """Logs tool calls and resource reads with timing."""

    def __init__(
        self,
        logger: logging.Logger | None = None,
        slow_threshold_ms: float = 5000.0,
    ) -> None:
        """Initialize logging middleware.

        Args:
            logger: Optional custom logger.
            slow_threshold_ms: Duration above which a call is logged as a warning.
        """
        self.logger = logger or logging.getLogger(__name__)
        self.slow_threshold_ms = slow_threshold_ms

    def _format_args(self, args: dict[str, Any] | None) -> str:
        if not args:
            return "()"
        return "(" + ", ".join(f"{k}={v!r}" for k, v in args.items()) + ")"

    def _log_done(self, kind: str, name: str, start: float) -> None:
        duration_ms = (time.perf_counter() - start) * 1000
        level = logging.WARNING if duration_ms >= self.slow_threshold_ms else logging.INFO
        self.logger.log(level, "<<< %s: %s [%.1fms]", kind, name, duration_ms)

    async def on_call_tool(
        self,
        context: MiddlewareContext,
        call_next: Any,
    ) -> Any:
        """Log tool name, arguments and duration."""
        start = time.perf_counter()
        tool_name = getattr(context.message, "name", "unknown")
        args = getattr(context.message, "arguments", None)
        self.logger.info(">>> TOOL: %s%s", tool_name, self._format_args(args))

        result = await call_next(context)
        self._log_done("TOOL", tool_name, start)
        return result

    async def on_read_resource(
        self,
        context: MiddlewareContext,
        call_next: Any,
    ) -> Any:
        """Log resource URI and duration."""
        start = time.perf_counter()
        uri = str(getattr(context.message, "uri", "unknown"))
        self.logger.info(">>> RESOURCE: %s", uri)

        result = await call_next(context)
        self._log_done("RESOURCE", uri, start)
        return result
