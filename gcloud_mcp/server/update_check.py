import logging
import os
import threading
from typing import Optional

import httpx
from packaging.version import InvalidVersion, Version

from gcloud_mcp.server.config import PACKAGE_NAME

logger = logging.getLogger(__name__)

PYPI_URL = f"https://pypi.org/pypi/{PACKAGE_NAME}/json"


def latest_version(client: httpx.Client) -> str:
    response = client.get(PYPI_URL)
    response.raise_for_status()
    return response.json()['info']['version']


def check_for_updates(current_version: str, client: Optional[httpx.Client] = None) -> Optional[str]:
    """
    Warn when a newer release is published on PyPI.

    Skipped when NO_UPDATE_CHECK is set. Network and parsing errors are
    ignored.

    Returns:
        The newer version, if any
    """
    if os.getenv("NO_UPDATE_CHECK"):
        return None

    owns_client = client is None
    client = client or httpx.Client(timeout=5.0)
    try:
        latest = latest_version(client)
    except (httpx.HTTPError, KeyError, ValueError) as e:
        logger.debug(f"Update check failed: {e}")
        return None
    finally:
        if owns_client:
            client.close()

    try:
        if Version(latest) <= Version(current_version):
            return None
    except InvalidVersion as e:
        logger.debug(f"Update check failed: {e}")
        return None
    logger.warning(f"UPDATE: {PACKAGE_NAME} {latest} is available (installed: {current_version})")
    return latest


def start_update_check(current_version: str) -> threading.Thread:
    """Run check_for_updates in a daemon thread so startup is not delayed."""
    thread = threading.Thread(
        target=check_for_updates, args=(current_version,), name="update-check", daemon=True
    )
    thread.start()
    return thread
