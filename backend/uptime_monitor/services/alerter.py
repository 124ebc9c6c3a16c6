"""Alerter service - sends up/down notifications on state changes."""
import asyncio
import logging
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Optional

import httpx

logger = logging.getLogger(__name__)

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S UTC"


def format_message(
    endpoint: str,
    is_down: bool,
    response_time: Optional[float] = None,
    now: Optional[datetime] = None,
) -> str:
    """Build the human-readable notification text."""
    timestamp = (now or datetime.now(timezone.utc)).strftime(TIMESTAMP_FORMAT)
    if is_down:
        return f"{endpoint} is DOWN! (Time: {timestamp})"
    return (
        f"{endpoint} is back UP! (Time: {timestamp}, "
        f"Response Time: {response_time or 0.0:.2f}s)"
    )


class Notifier(ABC):
    """Delivery channel for up/down notifications.

    Implementations never raise; delivery is best-effort and the result
    only reports whether the message went out.
    """

    @abstractmethod
    async def notify(
        self,
        endpoint: str,
        is_down: bool,
        response_time: Optional[float] = None,
    ) -> bool:
        ...


class NoOpNotifier(Notifier):
    """Used when no webhook is configured."""

    async def notify(
        self,
        endpoint: str,
        is_down: bool,
        response_time: Optional[float] = None,
    ) -> bool:
        logger.error(f"No webhook URL configured - skipping notification for {endpoint}")
        return False


class WebhookNotifier(Notifier):
    """Posts ``{"text": message}`` to a Slack-compatible incoming webhook."""

    def __init__(self, client: httpx.AsyncClient, webhook_url: str, timeout: float = 10.0):
        self.client = client
        self.webhook_url = webhook_url
        self.timeout = timeout

    async def notify(
        self,
        endpoint: str,
        is_down: bool,
        response_time: Optional[float] = None,
    ) -> bool:
        message = format_message(endpoint, is_down, response_time)
        logger.info(f"Sending notification: {message}")
        return await self._send_webhook({"text": message})

    async def _send_webhook(self, payload: dict) -> bool:
        """Send a webhook POST request."""
        try:
            response = await asyncio.wait_for(
                self.client.post(
                    self.webhook_url,
                    json=payload,
                    headers={"Content-Type": "application/json"},
                    timeout=self.timeout,
                ),
                timeout=self.timeout,
            )
        except asyncio.TimeoutError:
            logger.error(f"Failed to send webhook: no response within {self.timeout}s")
            return False
        except Exception as e:
            logger.error(f"Failed to send webhook: {e}")
            return False

        logger.info(f"Webhook response - Status: {response.status_code}, Body: {response.text}")
        if response.is_success:
            logger.info("Notification sent successfully")
            return True

        logger.error(f"Failed to send notification! Status: {response.status_code}")
        return False


def build_notifier(
    client: httpx.AsyncClient,
    webhook_url: Optional[str],
    timeout: float = 10.0,
) -> Notifier:
    """Pick the notifier variant for the configured target."""
    if webhook_url:
        logger.info("Webhook configured")
        return WebhookNotifier(client, webhook_url, timeout)
    logger.error("No webhook URL configured - notifications will not be sent")
    return NoOpNotifier()
