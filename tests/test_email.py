"""Unit tests for the SendGrid e-mail helpers."""

from __future__ import annotations

import json
import types

import pytest

from splitfy.infrastructure import email as email_module


class DummySettings:
    sendgrid_api_key = "SG.fake"
    sendgrid_sender = "sender@example.com"


class RecordingClient:
    sent: list = []

    def __init__(self, api_key: str):
        self.api_key = api_key

    def send(self, message):
        RecordingClient.sent.append(message)
        return types.SimpleNamespace(status_code=202, body=None)


@pytest.fixture(autouse=True)
def reset_recording_client():
    RecordingClient.sent = []


def test_send_email_without_configuration(monkeypatch: pytest.MonkeyPatch) -> None:
    """Missing SendGrid settings skip delivery."""

    class Unconfigured:
        sendgrid_api_key = None
        sendgrid_sender = None

    monkeypatch.setattr(email_module, "get_settings", lambda: Unconfigured())
    monkeypatch.setattr(email_module, "SendGridAPIClient", RecordingClient)

    assert email_module.send_email("Subject", "<p>Body</p>", "user@example.com") is False
    assert RecordingClient.sent == []


def test_send_email_success(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(email_module, "get_settings", lambda: DummySettings())
    monkeypatch.setattr(email_module, "SendGridAPIClient", RecordingClient)

    assert email_module.send_email("Subject", "<p>Body</p>", "user@example.com") is True
    assert len(RecordingClient.sent) == 1


def test_send_email_rejects_non_success_status(monkeypatch: pytest.MonkeyPatch, caplog):
    class RejectingClient(RecordingClient):
        def send(self, message):
            return types.SimpleNamespace(status_code=400, body=b"bad request")

    monkeypatch.setattr(email_module, "get_settings", lambda: DummySettings())
    monkeypatch.setattr(email_module, "SendGridAPIClient", RejectingClient)

    with caplog.at_level("ERROR"):
        result = email_module.send_email("Subject", "<p>Body</p>", "user@example.com")

    assert result is False
    assert "status 400: bad request" in caplog.text


def test_send_email_logs_forbidden_error(monkeypatch: pytest.MonkeyPatch, caplog):
    """Forbidden responses surface the SendGrid error messages in the log."""

    class FakeForbiddenError(Exception):
        status_code = 403
        body = json.dumps(
            {"errors": [{"message": "The provided authorization grant is invalid."}]}
        ).encode()

    class FailingClient(RecordingClient):
        def send(self, message):
            raise FakeForbiddenError()

    monkeypatch.setattr(email_module, "get_settings", lambda: DummySettings())
    monkeypatch.setattr(email_module, "SendGridAPIClient", FailingClient)

    with caplog.at_level("ERROR"):
        result = email_module.send_email("Subject", "<p>Body</p>", "user@example.com")

    assert result is False
    assert "status 403" in caplog.text
    assert "authorization grant is invalid" in caplog.text


def test_invitation_escapes_user_supplied_text(monkeypatch: pytest.MonkeyPatch) -> None:
    captured = {}

    def fake_send_email(subject, html_content, recipient):
        captured.update(subject=subject, html=html_content, recipient=recipient)
        return True

    monkeypatch.setattr(email_module, "send_email", fake_send_email)

    assert email_module.send_contract_invitation_email(
        "guest@example.com",
        collaborator_name="<b>Guest</b>",
        contract_title="Summer Single",
        inviter_name="Ana",
        role="Producer",
    )
    assert captured["recipient"] == "guest@example.com"
    assert "Summer Single" in captured["subject"]
    assert "&lt;b&gt;Guest&lt;/b&gt;" in captured["html"]
    assert "<b>Guest</b>" not in captured["html"]
