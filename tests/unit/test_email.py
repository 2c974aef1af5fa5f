"""Tests for the SendGrid provider and verification reminder mail."""

import json

import httpx
import pytest

from nikah_api.db.models import User
from nikah_api.providers.email import EmailServiceError, SendGridProvider
from nikah_api.services import notifications


def _provider(handler) -> SendGridProvider:
    return SendGridProvider(
        api_key="sg-key",
        from_email="noreply@nikahfirst.test",
        from_name="NikahFirst",
        transport=httpx.MockTransport(handler),
    )


async def test_send_email_posts_sendgrid_payload() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(202)

    await _provider(handler).send_email("ali@example.com", "Hello", "Body", to_name="Ali", category="test")

    [request] = seen
    assert request.headers["Authorization"] == "Bearer sg-key"
    payload = json.loads(request.content)
    assert payload["personalizations"] == [{"to": [{"email": "ali@example.com", "name": "Ali"}], "subject": "Hello"}]
    assert payload["from"] == {"email": "noreply@nikahfirst.test", "name": "NikahFirst"}
    assert payload["content"] == [{"type": "text/plain", "value": "Body"}]
    assert payload["categories"] == ["test"]


async def test_error_status_raises() -> None:
    provider = _provider(lambda request: httpx.Response(400, text='{"errors": []}'))

    with pytest.raises(EmailServiceError):
        await provider.send_email("ali@example.com", "Hello", "Body")


async def test_reminder_reports_delivery(monkeypatch: pytest.MonkeyPatch) -> None:
    sent: list[dict] = []

    def handler(request: httpx.Request) -> httpx.Response:
        sent.append(json.loads(request.content))
        return httpx.Response(202)

    monkeypatch.setattr(notifications, "get_email_provider", lambda: _provider(handler))
    user = User(name="Ali", email="ali@example.com", phone="+923001112222")

    assert await notifications.send_verification_reminder(user)

    [payload] = sent
    assert payload["personalizations"][0]["subject"] == notifications.REMINDER_SUBJECT
    assert "+923001112222" in payload["content"][0]["value"]


async def test_reminder_failure_is_reported_not_raised(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(
        notifications, "get_email_provider", lambda: _provider(lambda request: httpx.Response(500))
    )
    user = User(name="Ali", email="ali@example.com", phone="+923001112222")

    assert await notifications.send_verification_reminder(user) is False
