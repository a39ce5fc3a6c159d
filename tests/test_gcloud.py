import asyncio
import subprocess
import sys

import pytest

from gcloud_mcp.core import gcloud
from gcloud_mcp.core.gcloud import GcloudInvocationError, GcloudInvoker

MISSING = "gcloud-mcp-test-missing-binary"


def test_is_available():
    assert gcloud.is_available(sys.executable)
    assert not gcloud.is_available(MISSING)


def test_invoke_collects_output_and_exit_code():
    invoker = GcloudInvoker(executable=sys.executable)
    script = "import sys; print('out'); print('err', file=sys.stderr); sys.exit(3)"

    result = asyncio.run(invoker.invoke(["-c", script]))

    assert result.code == 3
    assert result.stdout.strip() == "out"
    assert result.stderr.strip() == "err"


def test_invoke_zero_exit_code():
    invoker = GcloudInvoker(executable=sys.executable)

    result = asyncio.run(invoker.invoke(["-c", "print('hello')"]))

    assert result.code == 0
    assert result.stdout.strip() == "hello"
    assert result.stderr == ""


def test_invoke_missing_binary_raises():
    invoker = GcloudInvoker(executable=MISSING)

    with pytest.raises(GcloudInvocationError):
        asyncio.run(invoker.invoke(["version"]))


def test_print_access_token(monkeypatch):
    calls = []

    def fake_run(args, **kwargs):
        calls.append(args)
        return subprocess.CompletedProcess(args, 0, stdout="ya29.token\n", stderr="")

    monkeypatch.setattr(gcloud.subprocess, "run", fake_run)

    assert gcloud.print_access_token() == "ya29.token"
    assert calls == [["gcloud", "auth", "print-access-token"]]


def test_print_access_token_failure():
    with pytest.raises(GcloudInvocationError):
        gcloud.print_access_token(executable=MISSING)
