"""
Logging helpers that attach structured context to stdlib log records.
"""
import json
import logging
import time
from contextlib import contextmanager
from typing import Any, Dict, Iterator, MutableMapping, Optional, Tuple


class ContextLogger(logging.LoggerAdapter):
    """
    Logger adapter that appends its context as JSON to every message.

    Example:
        log = ContextLogger(logger, {"tool": "run_gcloud_command"})
        log.info("Command denied")
        # Command denied | {"tool": "run_gcloud_command"}
    """

    def process(self, msg: Any, kwargs: MutableMapping[str, Any]) -> Tuple[Any, MutableMapping[str, Any]]:
        if self.extra:
            msg = f"{msg} | {json.dumps(self.extra, default=str)}"
        return msg, kwargs

    def with_context(self, **data: Any) -> "ContextLogger":
        return ContextLogger(self.logger, {**(self.extra or {}), **data})


def tool_logger(logger: logging.Logger, tool: str, tool_input: Optional[Dict[str, Any]] = None) -> ContextLogger:
    """Return a logger carrying the context of an MCP tool call."""
    context: Dict[str, Any] = {"operation": "mcp-tool", "tool": tool}
    if tool_input is not None:
        context["input"] = tool_input
    return ContextLogger(logger, context)


@contextmanager
def log_timer(logger: logging.Logger, operation: str) -> Iterator[None]:
    """Log how long the wrapped block took."""
    if not isinstance(logger, ContextLogger):
        logger = ContextLogger(logger, {})
    start = time.perf_counter()
    try:
        yield
    finally:
        duration = (time.perf_counter() - start) * 1000
        logger.with_context(timed_operation=operation, duration=f"{duration:.2f}ms").info("Operation completed")
