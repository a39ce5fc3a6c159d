import logging

from gcloud_mcp.server.logging_utils import ContextLogger, log_timer, tool_logger

logger = logging.getLogger("gcloud_mcp.tests")


def test_context_is_appended_as_json(caplog):
    with caplog.at_level(logging.INFO, logger=logger.name):
        ContextLogger(logger, {"tool": "run_gcloud_command"}).info("Command on denylist")

    assert caplog.messages == ['Command on denylist | {"tool": "run_gcloud_command"}']


def test_without_context_message_is_unchanged(caplog):
    with caplog.at_level(logging.INFO, logger=logger.name):
        ContextLogger(logger, {}).info("plain")

    assert caplog.messages == ["plain"]


def test_tool_logger_context():
    log = tool_logger(logger, "run_gcloud_command", {"args": ["compute", "ssh"]})

    assert log.extra == {
        "operation": "mcp-tool",
        "tool": "run_gcloud_command",
        "input": {"args": ["compute", "ssh"]},
    }
    assert log.with_context(user="a").extra["user"] == "a"
    assert "user" not in log.extra


def test_log_timer_logs_duration(caplog):
    with caplog.at_level(logging.INFO, logger=logger.name):
        with log_timer(logger, "gcloud"):
            pass

    assert len(caplog.records) == 1
    message = caplog.messages[0]
    assert message.startswith("Operation completed | ")
    assert '"timed_operation": "gcloud"' in message
    assert "ms" in message
