"""Best-effort build webhook (static site redeploy after article changes)."""
from __future__ import annotations

import threading
from typing import Callable, Optional

import requests
from loguru import logger

ErrorCallback = Callable[[Exception], None]


class BuildWebhook:
    """POSTs to ``url`` on a daemon thread.

    Failures go to ``on_error`` (logging by default) and never reach the
    caller that triggered the notification.
    """

    def __init__(self, url: Optional[str], timeout: float = 10.0, on_error: Optional[ErrorCallback] = None) -> None:
        self.url = url
        self.timeout = timeout
        self.on_error = on_error or self._log_error

    @staticmethod
    def _log_error(err: Exception) -> None:
        logger.error(f"build webhook failed: {err}")

    def send(self) -> None:
        """Blocking call; errors are routed to ``on_error``."""
        if not self.url:
            return
        try:
            resp = requests.post(self.url, headers={"Content-Type": "application/json"}, timeout=self.timeout)
            if not resp.ok:
                logger.warning(f"build webhook returned {resp.status_code} {resp.reason}")
            else:
                logger.info("build webhook triggered")
        except Exception as e:
            self.on_error(e)

    def trigger(self) -> Optional[threading.Thread]:
        if not self.url:
            logger.debug("no build webhook configured")
            return None
        thread = threading.Thread(target=self.send, name="build-webhook", daemon=True)
        thread.start()
        return thread
