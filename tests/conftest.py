from unittest.mock import MagicMock

import pytest


class RecordingMCP:
    """Stands in for FastMCP and keeps the registered tool functions."""

    def __init__(self):
        self.tools = {}
        self.descriptions = {}

    def tool(self, name=None, description=None, **kwargs):
        def decorator(fn):
            tool_name = name or fn.__name__
            self.tools[tool_name] = fn
            self.descriptions[tool_name] = description or fn.__doc__
            return fn
        return decorator


@pytest.fixture
def mcp():
    return RecordingMCP()


@pytest.fixture
def factory():
    """ApiClientFactory double whose clients are MagicMocks."""
    return MagicMock()
