import argparse
import logging
from typing import List, Optional

from gcloud_mcp.commands.init import AGENTS, init
from gcloud_mcp.core import gcloud
from gcloud_mcp.core.api_clients import ApiClientFactory
from gcloud_mcp.core.policy import CommandPolicy
from gcloud_mcp.server.config import (
    DEFAULT_DENYLIST, GCP_CREDENTIALS_PATH, LOG_LEVEL, MCP_HOST, MCP_PORT, VERSION,
    ConfigError, GcloudToolConfig, ServerConfig, configure_logging, load_config_file, merge_denylist,
)
from gcloud_mcp.server.mcpserver import TRANSPORTS, GcloudMCPServer, ObservabilityMCPServer
from gcloud_mcp.server.update_check import start_update_check

logger = logging.getLogger(__name__)


def build_parser(prog: str, description: str) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog=prog, description=description)
    parser.add_argument('--version', action='version', version=f'%(prog)s {VERSION}')
    parser.add_argument('--host', type=str, default=MCP_HOST, help='Host to bind the server to (sse)')
    parser.add_argument('--port', type=int, default=MCP_PORT, help='Port to listen on (sse)')
    parser.add_argument('--transport', type=str, default='stdio', choices=TRANSPORTS,
                        help='Transport mechanism to use (stdio or sse)')
    parser.add_argument('--log-level', type=str, default=LOG_LEVEL, help='Logging level')

    subparsers = parser.add_subparsers(dest='command')
    init_parser = subparsers.add_parser('init', help='Initialize the MCP server with an agent.')
    init_parser.add_argument('--agent', required=True, choices=AGENTS,
                             help='The agent to initialize the MCP server with.')
    init_parser.add_argument('--local', action='store_true',
                             help='Point the extension at the locally installed server.')
    return parser


def build_gcloud_parser() -> argparse.ArgumentParser:
    parser = build_parser('gcloud-mcp', 'Run the gcloud MCP server')
    parser.add_argument('--config', type=str, default=None,
                        help='Path to a JSON configuration file (must be an absolute path).')
    return parser


def build_observability_parser() -> argparse.ArgumentParser:
    parser = build_parser('observability-mcp', 'Run the Cloud Observability MCP server')
    parser.add_argument('--credentials', type=str, default=GCP_CREDENTIALS_PATH,
                        help='Path to GCP service account credentials JSON file')
    return parser


def load_gcloud_config(args: argparse.Namespace) -> ServerConfig:
    """
    Build the server configuration for gcloud-mcp.

    The user denylist is merged with DEFAULT_DENYLIST.
    """
    tool_config = load_config_file(args.config) if args.config else GcloudToolConfig()
    tool_config = GcloudToolConfig(
        allowlist=tool_config.allowlist,
        denylist=merge_denylist(DEFAULT_DENYLIST, tool_config.denylist),
    )
    return ServerConfig(
        host=args.host,
        port=args.port,
        log_level=args.log_level,
        run_gcloud_command=tool_config,
    )


def main(argv: Optional[List[str]] = None) -> int:
    args = build_gcloud_parser().parse_args(argv)
    configure_logging(args.log_level)

    if args.command == 'init':
        return init('gcloud-mcp', args.agent, local=args.local)

    if not gcloud.is_available():
        logger.error("Unable to start gcloud mcp server: gcloud executable not found.")
        return 1

    try:
        config = load_gcloud_config(args)
    except ConfigError as e:
        logger.error(str(e))
        return 1

    start_update_check(VERSION)

    tool_config = config.run_gcloud_command
    logger.info(
        f"Starting gcloud mcp server with {len(tool_config.allowlist)} allowlist "
        f"and {len(tool_config.denylist)} denylist entries"
    )
    policy = CommandPolicy(tool_config.allowlist, tool_config.denylist)
    server = GcloudMCPServer(config, policy)
    server.run(transport=args.transport)
    return 0


def observability_main(argv: Optional[List[str]] = None) -> int:
    args = build_observability_parser().parse_args(argv)
    configure_logging(args.log_level)

    if args.command == 'init':
        return init('observability-mcp', args.agent, local=args.local)

    # Without a service account, credentials come from gcloud.
    if not args.credentials and not gcloud.is_available():
        logger.error("Unable to start Cloud Observability MCP: gcloud executable not found for auth.")
        return 1

    config = ServerConfig(
        host=args.host,
        port=args.port,
        log_level=args.log_level,
        credentials_path=args.credentials,
    )
    start_update_check(VERSION)

    server = ObservabilityMCPServer(config, ApiClientFactory(config.credentials_path))
    server.run(transport=args.transport)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
