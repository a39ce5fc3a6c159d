import asyncio
import json
import logging
from typing import Callable

from gcloud_mcp.models.models import ToolErrorDetail

logger = logging.getLogger(__name__)

MAX_CHAR_LIMIT = 100000
EMPTY_RESULT_MESSAGE = "Invoked tool returned an empty result"


def tool_wrapper(callback: Callable[[], str]) -> str:
    """
    Run a tool callback and shape its result for the agent.

    Results are capped at MAX_CHAR_LIMIT characters, empty results are
    replaced with a sentence, and errors are returned as JSON.
    """
    try:
        result = callback()
    except Exception as e:
        logger.error(f"Error in tool_wrapper: {e}", exc_info=True)
        detail = ToolErrorDetail(name=type(e).__name__, message=str(e))
        return json.dumps({"error": detail.model_dump()})

    if len(result) > MAX_CHAR_LIMIT:
        result = result[:MAX_CHAR_LIMIT] + f"... (truncated due to {MAX_CHAR_LIMIT} character limit)"

    if result in ("", "[]", "{}"):
        result = EMPTY_RESULT_MESSAGE

    return result


async def run_tool(callback: Callable[[], str]) -> str:
    """Run tool_wrapper in a worker thread; API calls and gcloud auth block."""
    return await asyncio.to_thread(tool_wrapper, callback)
