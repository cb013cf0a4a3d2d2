"""Failure alerts for discovery runs and video jobs.

Sinks never raise: an alert that cannot be delivered is logged and dropped
so reporting a failure cannot cause another one.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from typing import Any

import httpx

from trendcast.core.logging import get_logger
from trendcast.infrastructure.http_client import HTTPClient

logger = get_logger(__name__)


class AlertKind(str, Enum):
    """What failed."""

    RUN_FAILED = "run_failed"
    JOB_FAILED = "job_failed"


@dataclass
class Alert:
    """Alert payload.

    Attributes:
        kind: What failed
        title: Short human-readable summary
        message: Failure details
        context: Identifiers (run id, job id, stage)
        created_at: When the alert was raised
    """

    kind: AlertKind
    title: str
    message: str
    context: dict[str, Any] = field(default_factory=dict)
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind.value,
            "title": self.title,
            "message": self.message,
            "context": self.context,
            "created_at": self.created_at.isoformat(),
        }


class AlertSink(ABC):
    """Destination for failure alerts."""

    @abstractmethod
    async def send(self, alert: Alert) -> None:
        """Deliver an alert. Must not raise."""


class LogAlertSink(AlertSink):
    """Writes alerts to the structured log."""

    async def send(self, alert: Alert) -> None:
        logger.error(
            alert.title, alert_kind=alert.kind.value, message=alert.message, **alert.context
        )


class WebhookAlertSink(AlertSink):
    """Posts alerts as JSON to a webhook and logs them as well.

    Example:
        >>> sink = WebhookAlertSink(http_client, "https://hooks.example.com/alerts")
        >>> await sink.send(Alert(AlertKind.JOB_FAILED, "Job failed", "timeout"))
    """

    def __init__(self, http_client: HTTPClient, url: str, timeout: float = 10.0) -> None:
        """Initialize webhook sink.

        Args:
            http_client: Shared HTTP client
            url: Webhook URL
            timeout: Request timeout in seconds
        """
        self._http_client = http_client
        self._url = url
        self._timeout = timeout
        self._log_sink = LogAlertSink()

    async def send(self, alert: Alert) -> None:
        await self._log_sink.send(alert)
        try:
            response = await self._http_client.post(
                self._url, json=alert.to_dict(), timeout=self._timeout
            )
            response.raise_for_status()
        except httpx.HTTPError as e:
            logger.warning("Alert webhook delivery failed", url=self._url, error=str(e))
        except Exception as e:
            logger.error(
                "Alert webhook raised unexpectedly", url=self._url, error=str(e), exc_info=True
            )


def create_alert_sink(http_client: HTTPClient, webhook_url: str = "") -> AlertSink:
    """Build the webhook sink when a URL is configured, else the log sink."""
    if webhook_url:
        return WebhookAlertSink(http_client, webhook_url)
    return LogAlertSink()


__all__ = [
    "Alert",
    "AlertKind",
    "AlertSink",
    "LogAlertSink",
    "WebhookAlertSink",
    "create_alert_sink",
]
