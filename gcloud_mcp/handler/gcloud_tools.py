"""
MCP tool for running gcloud commands.
This module registers run_gcloud_command, gated by the command policy.
"""
import logging
from typing import List

from mcp.server.fastmcp.exceptions import ToolError

from gcloud_mcp.core.gcloud import GcloudInvocationError, GcloudInvoker
from gcloud_mcp.core.policy import CommandPolicy, PolicyDecision
from gcloud_mcp.server.logging_utils import log_timer, tool_logger

logger = logging.getLogger(__name__)

TOOL_NAME = "run_gcloud_command"

NOT_ALLOWLISTED_MESSAGE = "Command is not part of this tool's current allowlist of enabled commands."
DENYLISTED_MESSAGE = "Command is part of this tool's current denylist of disabled commands."

RUN_GCLOUD_COMMAND_DESCRIPTION = """Executes a gcloud command.

## Instructions:
- Use this tool to execute a single gcloud command at a time.
- Use this tool when you are confident about the exact gcloud command needed to fulfill the user's request.
- Prioritize this tool over any other to directly execute gcloud commands.
- Assume all necessary APIs are already enabled. Do not proactively try to enable any APIs.
- Do not use this tool to execute command chaining or command sequencing -- it will fail.
- Always include all required parameters.
- Ensure parameter values match the expected format.

## Adhere to the following restrictions:
- **No command substitution**: Do not use subshells or command substitution (e.g., $(...))
- **No pipes**: Do not use pipes (i.e., |) or any other shell-specific operators
- **No redirection**: Do not use redirection operators (e.g., >, >>, <)"""


class GcloudTools:
    """
    The run_gcloud_command tool for MCP.
    """

    def __init__(self, policy: CommandPolicy, invoker: GcloudInvoker, mcp):
        """
        Initialize with a command policy, a gcloud invoker and MCP instance.

        Args:
            policy: Allowlist/denylist applied before every invocation
            invoker: Runs the gcloud process
            mcp: MCP instance for registering tools
        """
        self.policy = policy
        self.invoker = invoker
        self.mcp = mcp
        self.register_tools()

    async def run_gcloud_command(self, args: List[str]) -> str:
        log = tool_logger(logger, TOOL_NAME, {"args": args})

        decision = self.policy.evaluate(args)
        if decision is PolicyDecision.DENIED_BY_ALLOWLIST:
            log.info("Command not on allowlist")
            return NOT_ALLOWLISTED_MESSAGE
        if decision is PolicyDecision.DENIED_BY_DENYLIST:
            log.info("Command on denylist")
            return DENYLISTED_MESSAGE

        try:
            with log_timer(log, "gcloud"):
                result = await self.invoker.invoke(args)
        except GcloudInvocationError as e:
            log.error(f"Error invoking gcloud: {e}")
            raise ToolError(str(e)) from e

        return result.to_text()

    def register_tools(self):
        """Register run_gcloud_command with MCP."""
        @self.mcp.tool(name=TOOL_NAME, description=RUN_GCLOUD_COMMAND_DESCRIPTION)
        async def run_gcloud_command(args: List[str]) -> str:
            return await self.run_gcloud_command(args)
