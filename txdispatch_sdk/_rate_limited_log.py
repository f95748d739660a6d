"""
Thread-safe rate-limited logging.

Dispatches can run concurrently against one client, so warnings that repeat
on every call (chain check disabled, dropped extension fields) are logged at
most once per interval.
"""
import logging
import threading
import time
from typing import Optional

from cachetools import TTLCache

logger = logging.getLogger(__name__)

_log_cache: TTLCache = TTLCache(maxsize=256, ttl=3600)
_log_cache_lock = threading.RLock()


def rate_limited_log(
    message: str,
    level: str = "warning",
    interval: int = 60,
    logger_instance: Optional[logging.Logger] = None
) -> bool:
    """
    Log a message unless the same message was logged within `interval` seconds.

    Args:
        message: Message to log
        level: Log level (debug, info, warning, error, critical)
        interval: Minimum interval between identical logs in seconds
        logger_instance: Logger to use (defaults to module logger)

    Returns:
        True if the message was logged, False if it was suppressed
    """
    log_instance = logger_instance or logger
    log_method = getattr(log_instance, level.lower(), log_instance.warning)
    key = (log_instance.name, level, message)

    with _log_cache_lock:
        last_logged = _log_cache.get(key)
        now = time.monotonic()
        if last_logged is not None and now - last_logged < interval:
            return False
        _log_cache[key] = now

    log_method(message)
    return True


def reset_rate_limited_log() -> None:
    """Forget every logged message."""
    with _log_cache_lock:
        _log_cache.clear()
