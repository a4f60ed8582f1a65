"""Tests for the send / verify CLI commands."""

import json

import httpx
from typer.testing import CliRunner

from msgraph_mail import config as config_module
from msgraph_mail.auth.cache import default_cache
from msgraph_mail.cli import app, send_mode, shared, verify_mode
from msgraph_mail.errors import CouldNotSendMail

runner = CliRunner()


def _set_credentials(monkeypatch, client="client-id", secret="s3cret"):
    monkeypatch.setattr(config_module, "AZURE_TENANT_ID", "contoso")
    monkeypatch.setattr(config_module, "AZURE_CLIENT_ID", client)
    monkeypatch.setattr(config_module, "AZURE_CLIENT_SECRET", secret)


def _mock_http(monkeypatch, handler):
    monkeypatch.setattr(
        verify_mode,
        "default_http_client",
        lambda: httpx.Client(transport=httpx.MockTransport(handler)),
    )


def test_send_dry_run_writes_payload(tmp_path, monkeypatch):
    sent = tmp_path / "sent.json"
    attachment = tmp_path / "notes.txt"
    attachment.write_bytes(b"hello")
    monkeypatch.setattr(shared, "DEFAULT_SENT_ITEMS_PATH", sent)

    result = runner.invoke(
        app,
        [
            "send",
            "--from", "Alice <a@x.com>",
            "--to", "b@y.com",
            "--to", "Carol <c@z.com>",
            "--cc", "d@z.com",
            "--subject", "Hi",
            "--body", "<p>hi</p>",
            "--html",
            "--attach", str(attachment),
            "--dry-run",
        ],
    )

    assert result.exit_code == 0, result.output
    message = json.loads(sent.read_text(encoding="utf-8"))[0]["body"]["message"]
    assert message["from"] == {"emailAddress": {"name": "Alice", "address": "a@x.com"}}
    assert message["toRecipients"] == [
        {"emailAddress": {"address": "b@y.com"}},
        {"emailAddress": {"name": "Carol", "address": "c@z.com"}},
    ]
    assert message["ccRecipients"] == [{"emailAddress": {"address": "d@z.com"}}]
    assert message["body"] == {"contentType": "html", "content": "<p>hi</p>"}
    assert message["attachments"][0]["name"] == "notes.txt"
    assert message["attachments"][0]["contentType"] == "text/plain"
    assert message["attachments"][0]["size"] == 5


def test_send_requires_sender(monkeypatch):
    monkeypatch.delenv("GRAPH_SENDER", raising=False)
    monkeypatch.setattr(send_mode, "GRAPH_SENDER", "")
    result = runner.invoke(app, ["send", "--to", "b@y.com", "--dry-run"])
    assert result.exit_code == 1
    assert "--from" in result.output


def test_send_uses_configured_sender(tmp_path, monkeypatch):
    sent = tmp_path / "sent.json"
    monkeypatch.setattr(shared, "DEFAULT_SENT_ITEMS_PATH", sent)
    monkeypatch.setattr(send_mode, "GRAPH_SENDER", "mailbox@x.com")
    result = runner.invoke(app, ["send", "--to", "b@y.com", "--body", "x", "--dry-run"])
    assert result.exit_code == 0, result.output
    message = json.loads(sent.read_text(encoding="utf-8"))[0]["body"]["message"]
    assert message["from"] == {"emailAddress": {"address": "mailbox@x.com"}}


class RecordingTransport:
    """Stand-in transport that tracks whether the CLI closed it."""

    def __init__(self, error=None):
        self.error = error
        self.sent = []
        self.closed = False

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.closed = True

    def send(self, message):
        if self.error is not None:
            raise self.error
        self.sent.append(message)


def test_send_closes_transport(monkeypatch):
    transport = RecordingTransport()
    monkeypatch.setattr(send_mode, "get_transport", lambda dry_run: transport)
    result = runner.invoke(app, ["send", "--from", "a@x.com", "--to", "b@y.com", "--body", "x"])
    assert result.exit_code == 0, result.output
    assert len(transport.sent) == 1
    assert transport.closed


def test_send_reports_graph_error(monkeypatch):
    transport = RecordingTransport(
        CouldNotSendMail.service_responded_with_error("ErrorAccessDenied", "Access denied")
    )
    monkeypatch.setattr(send_mode, "get_transport", lambda dry_run: transport)
    result = runner.invoke(app, ["send", "--from", "a@x.com", "--to", "b@y.com", "--body", "x"])
    assert result.exit_code == 1
    assert "ErrorAccessDenied" in result.output
    assert transport.closed


def test_verify_success(monkeypatch):
    default_cache.clear()
    _set_credentials(monkeypatch)
    _mock_http(monkeypatch, lambda request: httpx.Response(200, json={"access_token": "abcdefgh12345"}))
    result = runner.invoke(app, ["verify"])
    default_cache.clear()
    assert result.exit_code == 0, result.output
    assert "Token acquired" in result.output
    assert "abcdefgh12345" not in result.output


def test_verify_reports_rejected_credentials(monkeypatch):
    default_cache.clear()
    _set_credentials(monkeypatch)
    _mock_http(
        monkeypatch,
        lambda request: httpx.Response(401, json={"error": "invalid_client", "error_description": "bad secret"}),
    )
    result = runner.invoke(app, ["verify"])
    assert result.exit_code == 1
    assert "invalid_client" in result.output


def test_verify_requires_credentials(monkeypatch):
    _set_credentials(monkeypatch, client="", secret="")
    result = runner.invoke(app, ["verify"])
    assert result.exit_code == 1
    assert "AZURE_CLIENT_ID" in result.output
