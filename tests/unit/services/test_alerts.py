"""Unit tests for alert sinks."""

import httpx
import pytest

from trendcast.services.alerts import (
    Alert,
    AlertKind,
    LogAlertSink,
    WebhookAlertSink,
    create_alert_sink,
)

WEBHOOK_URL = "https://hooks.example.com/alerts"


def job_alert() -> Alert:
    return Alert(
        kind=AlertKind.JOB_FAILED,
        title="Video job failed",
        message="script_generation failed: RuntimeError: boom",
        context={"job_id": "123", "stage": "script_generation"},
    )


class TestAlert:
    """Tests for the Alert payload."""

    def test_to_dict(self):
        """Test serialization uses plain values."""
        data = job_alert().to_dict()

        assert data["kind"] == "job_failed"
        assert data["context"] == {"job_id": "123", "stage": "script_generation"}
        assert "T" in data["created_at"]


class TestWebhookAlertSink:
    """Tests for WebhookAlertSink."""

    @pytest.mark.asyncio
    async def test_posts_json(self, mock_http_client, make_response):
        """Test the alert is posted to the webhook."""
        mock_http_client.post.return_value = make_response(json_data={})
        sink = WebhookAlertSink(mock_http_client, WEBHOOK_URL)
        alert = job_alert()

        await sink.send(alert)

        mock_http_client.post.assert_awaited_once()
        call = mock_http_client.post.call_args
        assert call.args[0] == WEBHOOK_URL
        assert call.kwargs["json"] == alert.to_dict()

    @pytest.mark.asyncio
    async def test_delivery_failure_swallowed(self, mock_http_client):
        """Test webhook errors never propagate."""
        mock_http_client.post.side_effect = httpx.ConnectError("refused")
        sink = WebhookAlertSink(mock_http_client, WEBHOOK_URL)

        await sink.send(job_alert())

    @pytest.mark.asyncio
    async def test_error_status_swallowed(self, mock_http_client, make_response):
        """Test non-2xx webhook responses never propagate."""
        response = make_response(status_code=500)
        response.raise_for_status.side_effect = httpx.HTTPStatusError(
            "500 Internal Server Error", request=None, response=None
        )
        mock_http_client.post.return_value = response
        sink = WebhookAlertSink(mock_http_client, WEBHOOK_URL)

        await sink.send(job_alert())

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "error", [httpx.InvalidURL("No scheme included in URL"), ValueError("bad payload")]
    )
    async def test_unexpected_error_swallowed(self, mock_http_client, error):
        """Test errors outside httpx.HTTPError never propagate either."""
        mock_http_client.post.side_effect = error
        sink = WebhookAlertSink(mock_http_client, WEBHOOK_URL)

        await sink.send(job_alert())

        mock_http_client.post.assert_awaited_once()


class TestCreateAlertSink:
    """Tests for create_alert_sink."""

    def test_webhook_when_configured(self, mock_http_client):
        assert isinstance(create_alert_sink(mock_http_client, WEBHOOK_URL), WebhookAlertSink)

    def test_log_sink_by_default(self, mock_http_client):
        assert isinstance(create_alert_sink(mock_http_client), LogAlertSink)

    @pytest.mark.asyncio
    async def test_log_sink_send(self):
        """Test the log sink accepts any alert."""
        await LogAlertSink().send(job_alert())
