"""
Tests for rate-limited logging.
"""
import logging
import threading

from unittest.mock import MagicMock, patch

from txdispatch_sdk import _rate_limited_log
from txdispatch_sdk._rate_limited_log import rate_limited_log, reset_rate_limited_log


def test_repeated_message_suppressed():
    mock_logger = MagicMock()
    mock_logger.name = "test"

    assert rate_limited_log("chain check disabled", logger_instance=mock_logger) is True
    assert rate_limited_log("chain check disabled", logger_instance=mock_logger) is False

    mock_logger.warning.assert_called_once_with("chain check disabled")


def test_distinct_messages_and_levels():
    mock_logger = MagicMock()
    mock_logger.name = "test"

    assert rate_limited_log("first", logger_instance=mock_logger)
    assert rate_limited_log("second", logger_instance=mock_logger)
    assert rate_limited_log("first", level="error", logger_instance=mock_logger)

    assert mock_logger.warning.call_count == 2
    mock_logger.error.assert_called_once_with("first")


def test_logged_again_after_interval():
    mock_logger = MagicMock()
    mock_logger.name = "test"

    with patch.object(_rate_limited_log, "time") as mock_time:
        mock_time.monotonic.side_effect = [100.0, 130.0, 161.0]
        assert rate_limited_log("msg", interval=60, logger_instance=mock_logger)
        assert not rate_limited_log("msg", interval=60, logger_instance=mock_logger)
        assert rate_limited_log("msg", interval=60, logger_instance=mock_logger)

    assert mock_logger.warning.call_count == 2


def test_reset_forgets_messages():
    mock_logger = MagicMock()
    mock_logger.name = "test"

    rate_limited_log("msg", logger_instance=mock_logger)
    reset_rate_limited_log()
    assert rate_limited_log("msg", logger_instance=mock_logger)


def test_default_logger(caplog):
    with caplog.at_level(logging.INFO, logger="txdispatch_sdk._rate_limited_log"):
        rate_limited_log("hello", level="info")
    assert "hello" in caplog.text


def test_thread_safety():
    """Concurrent callers log a message exactly once"""
    mock_logger = MagicMock()
    mock_logger.name = "test"
    results = []

    def worker():
        results.append(rate_limited_log("shared", logger_instance=mock_logger))

    threads = [threading.Thread(target=worker) for _ in range(20)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert results.count(True) == 1
    mock_logger.warning.assert_called_once()
