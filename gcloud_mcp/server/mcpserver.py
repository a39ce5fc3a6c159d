"""
MCP server implementations for gcloud and Cloud Observability.
Based on the official MCP documentation.
"""
import logging
from typing import Optional

from mcp.server.fastmcp import FastMCP

from gcloud_mcp.core.api_clients import ApiClientFactory
from gcloud_mcp.core.gcloud import GcloudInvoker
from gcloud_mcp.core.policy import CommandPolicy
from gcloud_mcp.handler.gcloud_tools import GcloudTools
from gcloud_mcp.handler.observability_tools import ObservabilityTools
from gcloud_mcp.server.config import ServerConfig

logger = logging.getLogger(__name__)

TRANSPORTS = ('stdio', 'sse')


class MCPServer:
    """
    Base MCP server.
    Sets up FastMCP and registers tools before running.
    """

    name = "mcp-server"
    instructions: Optional[str] = None

    def __init__(self, config: ServerConfig):
        """
        Initialize the MCP server.

        Args:
            config: Startup configuration
        """
        self.config = config
        self.mcp = FastMCP(
            self.name,
            instructions=self.instructions,
            host=config.host,
            port=config.port,
        )
        self.tools = None

    def register_tools(self):
        raise NotImplementedError

    def setup(self):
        """Register tools with MCP."""
        try:
            self.tools = self.register_tools()
            logger.info(f"{self.name} setup complete with tools registered")
        except Exception as e:
            logger.error(f"Error setting up {self.name}: {e}")
            raise

    def run(self, transport='stdio'):
        """
        Run the MCP server with the specified transport.

        Args:
            transport: The transport to use ('stdio' or 'sse')
        """
        if transport not in TRANSPORTS:
            raise ValueError(f"Unsupported transport: {transport}")
        try:
            self.setup()

            transport_info = transport
            if transport == 'sse':
                transport_info += f" on {self.config.host}:{self.config.port}"
            logger.info(f"Starting {self.name} with {transport_info}")

            self.mcp.run(transport=transport)
        except Exception as e:
            logger.error(f"Error running {self.name}: {e}")
            raise


class GcloudMCPServer(MCPServer):
    """MCP server exposing the policy-gated run_gcloud_command tool."""

    name = "gcloud-mcp-server"

    def __init__(self, config: ServerConfig, policy: CommandPolicy, invoker: Optional[GcloudInvoker] = None):
        super().__init__(config)
        self.policy = policy
        self.invoker = invoker or GcloudInvoker()

    def register_tools(self):
        return GcloudTools(self.policy, self.invoker, self.mcp)


class ObservabilityMCPServer(MCPServer):
    """MCP server for interacting with the Cloud Observability APIs."""

    name = "observability-mcp"
    instructions = "MCP Server for GCP environment for interacting with various Observability APIs"

    def __init__(self, config: ServerConfig, factory: Optional[ApiClientFactory] = None):
        super().__init__(config)
        self.factory = factory or ApiClientFactory(config.credentials_path)

    def register_tools(self):
        return ObservabilityTools(self.factory, self.mcp)
