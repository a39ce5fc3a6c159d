"""
Invocation of the gcloud CLI.
"""
import asyncio
import logging
import shutil
import subprocess
from typing import List

from gcloud_mcp.models.models import GcloudResult

logger = logging.getLogger(__name__)

GCLOUD = "gcloud"


class GcloudInvocationError(Exception):
    """Raised when the gcloud process cannot be started."""


def is_available(executable: str = GCLOUD) -> bool:
    """Return True if the gcloud executable is on PATH."""
    return shutil.which(executable) is not None


class GcloudInvoker:
    """
    Runs gcloud commands as subprocesses.
    """

    def __init__(self, executable: str = GCLOUD):
        self.executable = executable

    async def invoke(self, args: List[str]) -> GcloudResult:
        """
        Run `gcloud <args>` and collect its output.

        Non-zero exit codes are returned, not raised: a command that creates
        several resources may list some of them and still exit non-zero.

        Args:
            args: Arguments passed to gcloud

        Returns:
            GcloudResult: Exit code, stdout and stderr of the process
        """
        try:
            process = await asyncio.create_subprocess_exec(
                self.executable,
                *args,
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as e:
            logger.error(f"Failed to start {self.executable}: {e}")
            raise GcloudInvocationError(f"Failed to start {self.executable}: {e}") from e

        stdout, stderr = await process.communicate()
        return GcloudResult(
            code=process.returncode,
            stdout=stdout.decode(errors="replace"),
            stderr=stderr.decode(errors="replace"),
        )


def print_access_token(executable: str = GCLOUD) -> str:
    """Return an OAuth access token for the active gcloud account."""
    try:
        result = subprocess.run(
            [executable, "auth", "print-access-token"],
            stdin=subprocess.DEVNULL,
            capture_output=True,
            text=True,
            check=True,
        )
    except (OSError, subprocess.CalledProcessError) as e:
        raise GcloudInvocationError(f"Unable to obtain an access token from gcloud: {e}") from e
    return result.stdout.strip()
