import asyncio
from unittest.mock import AsyncMock

import pytest
from mcp.server.fastmcp.exceptions import ToolError

from gcloud_mcp.core.gcloud import GcloudInvocationError
from gcloud_mcp.core.policy import CommandPolicy
from gcloud_mcp.handler.gcloud_tools import (
    DENYLISTED_MESSAGE,
    NOT_ALLOWLISTED_MESSAGE,
    TOOL_NAME,
    GcloudTools,
)
from gcloud_mcp.models.models import GcloudResult


def make_tool(mcp, invoker, allowlist=(), denylist=()):
    GcloudTools(CommandPolicy(allowlist, denylist), invoker, mcp)
    return mcp.tools[TOOL_NAME]


@pytest.fixture
def invoker():
    invoker = AsyncMock()
    invoker.invoke.return_value = GcloudResult(code=0, stdout="output", stderr="")
    return invoker


def test_registers_run_gcloud_command(mcp, invoker):
    GcloudTools(CommandPolicy(), invoker, mcp)
    assert list(mcp.tools) == [TOOL_NAME]
    assert "No pipes" in mcp.descriptions[TOOL_NAME]


def test_invokes_gcloud_for_allowlisted_command(mcp, invoker):
    tool = make_tool(mcp, invoker, allowlist=["a b"])

    result = asyncio.run(tool(["a", "b", "c"]))

    invoker.invoke.assert_awaited_once_with(["a", "b", "c"])
    assert result == "gcloud process exited with code 0. stdout:\noutput"


def test_rejects_command_not_on_allowlist(mcp, invoker):
    tool = make_tool(mcp, invoker, allowlist=["a b"])

    result = asyncio.run(tool(["a", "c"]))

    invoker.invoke.assert_not_called()
    assert result == NOT_ALLOWLISTED_MESSAGE


def test_rejects_denylisted_command(mcp, invoker):
    tool = make_tool(mcp, invoker, denylist=["compute list"])

    result = asyncio.run(tool(["compute", "list", "--zone", "eastus1"]))

    invoker.invoke.assert_not_called()
    assert result == DENYLISTED_MESSAGE


def test_rejects_denylisted_command_on_release_track(mcp, invoker):
    tool = make_tool(mcp, invoker, denylist=["compute ssh"])

    result = asyncio.run(tool(["beta", "compute", "ssh", "my-vm"]))

    invoker.invoke.assert_not_called()
    assert result == DENYLISTED_MESSAGE


def test_invokes_gcloud_for_command_not_on_denylist(mcp, invoker):
    tool = make_tool(mcp, invoker, denylist=["compute list"])

    result = asyncio.run(tool(["compute", "create"]))

    invoker.invoke.assert_awaited_once_with(["compute", "create"])
    assert result == "gcloud process exited with code 0. stdout:\noutput"


def test_command_on_both_lists_is_denied(mcp, invoker):
    tool = make_tool(mcp, invoker, allowlist=["a b"], denylist=["a b"])

    result = asyncio.run(tool(["a", "b", "c"]))

    invoker.invoke.assert_not_called()
    assert result == DENYLISTED_MESSAGE


def test_includes_stderr_and_nonzero_exit_code(mcp, invoker):
    invoker.invoke.return_value = GcloudResult(code=1, stdout="", stderr="ERROR: not found")
    tool = make_tool(mcp, invoker)

    result = asyncio.run(tool(["compute", "instances", "describe", "vm"]))

    assert result == "gcloud process exited with code 1. stdout:\n\nstderr:\nERROR: not found"


def test_invocation_failure_is_a_tool_error(mcp, invoker):
    invoker.invoke.side_effect = GcloudInvocationError("Failed to start gcloud: not found")
    tool = make_tool(mcp, invoker)

    with pytest.raises(ToolError, match="Failed to start gcloud"):
        asyncio.run(tool(["compute", "instances", "list"]))
