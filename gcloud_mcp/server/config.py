import json
import logging
import os
import sys
from importlib.metadata import PackageNotFoundError, version
from typing import Iterable, List, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError

# Load environment variables from .env file
load_dotenv()

PACKAGE_NAME = "gcloud-mcp"
try:
    VERSION = version(PACKAGE_NAME)
except PackageNotFoundError:
    # Running from a source checkout.
    VERSION = "0.0.0"

# MCP Server Configuration
MCP_HOST = os.getenv("MCP_HOST", "0.0.0.0")
MCP_PORT = int(os.getenv("MCP_PORT", "8000"))

# GCP Configuration
GCP_CREDENTIALS_PATH = os.getenv("GCP_CREDENTIALS_PATH")

# Logging Configuration
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

# Commands that open interactive sessions or tunnels.
DEFAULT_DENYLIST: List[str] = [
    "compute start-iap-tunnel",
    "compute connect-to-serial-port",
    "compute tpus tpu-vm ssh",
    "compute tpus queued-resources ssh",
    "compute ssh",
    "cloud-shell ssh",
    "workstations ssh",
    "app instances ssh",
]


class ConfigError(Exception):
    """Raised when the configuration file cannot be used."""


class GcloudToolConfig(BaseModel):
    """Allowlist and denylist for the run_gcloud_command tool."""
    allowlist: List[str] = Field(default_factory=list)
    denylist: List[str] = Field(default_factory=list)


class ConfigFile(BaseModel):
    run_gcloud_command: GcloudToolConfig = Field(default_factory=GcloudToolConfig)


class ServerConfig(BaseModel):
    """
    Startup configuration, built once in main and passed to the servers.
    """
    host: str = MCP_HOST
    port: int = MCP_PORT
    log_level: str = LOG_LEVEL
    credentials_path: Optional[str] = GCP_CREDENTIALS_PATH
    run_gcloud_command: GcloudToolConfig = Field(default_factory=GcloudToolConfig)


def load_config_file(path: str) -> GcloudToolConfig:
    """
    Load the run_gcloud_command section of a JSON configuration file.

    Args:
        path: Absolute path to the configuration file

    Returns:
        GcloudToolConfig: The allowlist and denylist from the file
    """
    if not os.path.isabs(path):
        raise ConfigError("The --config path must be an absolute file path.")
    try:
        with open(path, encoding="utf-8") as f:
            raw = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigError(f"Error reading or parsing config file: {e}") from e

    try:
        return ConfigFile.model_validate(raw).run_gcloud_command
    except ValidationError as e:
        raise ConfigError(f"Invalid config file {path}: {e}") from e


def merge_denylist(default: Iterable[str], user: Iterable[str]) -> List[str]:
    """Union of two denylists, keeping first-seen order."""
    return list(dict.fromkeys([*default, *user]))


def configure_logging(level: str = LOG_LEVEL) -> None:
    # stdout carries the stdio transport, so logs go to stderr.
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
        stream=sys.stderr,
    )
