"""
Scaffolding that installs an MCP server as a Gemini CLI extension.
"""
import json
import logging
import os
from typing import Dict, Optional

from gcloud_mcp.server.config import PACKAGE_NAME, VERSION

logger = logging.getLogger(__name__)

AGENTS = ('gemini-cli',)

GCLOUD_CONTEXT = """# gcloud MCP server

Use the `run_gcloud_command` tool to run a single gcloud command.

- Pass the command as a list of arguments without the leading `gcloud`,
  for example `["compute", "instances", "list", "--format=json"]`.
- Prefer `--format=json` when you need to read the output.
- Do not use pipes, redirection, command substitution or command chaining.
- Some commands are blocked by the server's allowlist or denylist. When a
  command is reported as not enabled, do not retry it with a different
  release track; tell the user instead.
"""

OBSERVABILITY_CONTEXT = """# Cloud Observability MCP server

Tools for reading Google Cloud Logging, Monitoring, Trace and Error
Reporting data.

- Start with `list_log_entries` to search logs. Always narrow the filter
  with a timestamp range and use `order_by="timestamp desc"` for recent logs.
- Use `list_metric_descriptors` to find a metric type before calling
  `list_time_series`, and `query_range` for PromQL queries.
- Use `list_traces` to find slow requests, then `get_trace` for details.
- Use `list_group_stats` to find the most frequent errors.
"""

SERVERS: Dict[str, Dict[str, str]] = {
    'gcloud-mcp': {
        'key': 'gcloud',
        'description': 'Enable MCP-compatible AI agents to interact with Google Cloud.',
        'context': GCLOUD_CONTEXT,
    },
    'observability-mcp': {
        'key': 'observability',
        'description': 'Enable MCP-compatible AI agents to read Google Cloud Observability data.',
        'context': OBSERVABILITY_CONTEXT,
    },
}


def extension_manifest(server: str, local: bool = False) -> dict:
    """
    Build gemini-extension.json for a server.

    Args:
        server: Console script of the server (gcloud-mcp or observability-mcp)
        local: Use the locally installed script instead of uvx
    """
    entry = SERVERS[server]
    if local:
        command = {'command': server, 'args': []}
    else:
        command = {'command': 'uvx', 'args': ['--from', PACKAGE_NAME, server]}
    return {
        'name': server + (' [LOCAL]' if local else ''),
        'version': VERSION,
        'description': entry['description'],
        'contextFileName': 'GEMINI.md',
        'mcpServers': {entry['key']: command},
    }


def initialize_gemini_cli(server: str, local: bool = False, cwd: Optional[str] = None) -> Optional[str]:
    """
    Create the Gemini CLI extension for a server.

    Writes .gemini/extensions/<server>/gemini-extension.json and GEMINI.md
    under cwd. cwd defaults to INIT_CWD, then the process working directory.

    Returns:
        The extension directory, or None if it could not be created
    """
    cwd = cwd or os.environ.get('INIT_CWD') or os.getcwd()
    extension_dir = os.path.join(cwd, '.gemini', 'extensions', server)
    try:
        os.makedirs(extension_dir, exist_ok=True)

        extension_file = os.path.join(extension_dir, 'gemini-extension.json')
        with open(extension_file, 'w', encoding='utf-8') as f:
            json.dump(extension_manifest(server, local), f, indent=2)
        # Command output, not part of the MCP server.
        print(f"Created: {extension_file}")

        context_file = os.path.join(extension_dir, 'GEMINI.md')
        with open(context_file, 'w', encoding='utf-8') as f:
            f.write(SERVERS[server]['context'])
        print(f"Created: {context_file}")

        print(f"🌱 {server} Gemini CLI extension initialized.")
        return extension_dir
    except OSError as e:
        logger.error(f"❌ {server} Gemini CLI extension initialization failed: {e}")
        return None


def init(server: str, agent: str, local: bool = False) -> int:
    """Run the init command; returns a process exit code."""
    if agent == 'gemini-cli':
        return 0 if initialize_gemini_cli(server, local=local) else 1
    raise ValueError(f"Unknown agent: {agent}")
