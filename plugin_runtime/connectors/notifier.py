from __future__ import annotations

import logging
from typing import Protocol

logger = logging.getLogger(__name__)


class Notifier(Protocol):
    def notify(self, message: str, timeout_ms: int, category: str) -> None: ...


class LogNotifier:
    """Desktop notifications are a host concern; by default they go to the log."""

    def notify(self, message: str, timeout_ms: int, category: str) -> None:
        logger.info("notify [%s] (%sms): %s", category or "plugin", timeout_ms, message)
