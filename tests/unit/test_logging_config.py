"""Tests for mailhub/logging_config.py - handler setup and token redaction"""

import logging

import pytest

from mailhub.logging_config import QUIET_LOGGERS, add_service_info, redact_tokens, setup_logging


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)


class TestRedactTokens:
    def test_masks_bearer_header(self):
        event = redact_tokens(None, "error", {"event": "GET failed: Authorization: Bearer abc.DEF-123"})
        assert event["event"] == "GET failed: Authorization: Bearer [REDACTED]"

    def test_masks_bare_google_token(self):
        event = redact_tokens(None, "info", {"event": "token ya29.a0AfB_xyz expired"})
        assert event["event"] == "token [REDACTED] expired"

    def test_leaves_other_values(self):
        event = redact_tokens(None, "info", {"event": "Fetched 20 messages", "count": 20})
        assert event == {"event": "Fetched 20 messages", "count": 20}


def test_service_info_does_not_override():
    event = add_service_info(None, "info", {"event": "x", "service": "worker"})
    assert event["service"] == "worker"
    assert "version" in event


class TestSetupLogging:
    def test_single_handler_at_level(self, restore_root_logger):
        setup_logging(level="debug", json_output=False)
        setup_logging(level="debug", json_output=False)

        assert len(restore_root_logger.handlers) == 1
        assert restore_root_logger.level == logging.DEBUG

    def test_unknown_level_falls_back_to_info(self, restore_root_logger):
        setup_logging(level="chatty", json_output=True)

        assert restore_root_logger.level == logging.INFO

    def test_quiets_third_party_loggers(self, restore_root_logger):
        setup_logging(level="INFO", json_output=False)

        for name in QUIET_LOGGERS:
            assert logging.getLogger(name).level == logging.WARNING
