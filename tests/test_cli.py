# tests/test_cli.py
import json

import pytest
import requests
from typer.testing import CliRunner

from anymessage.cli import config, utils_cli
from anymessage.cli.main_cli import app

runner = CliRunner()


class FakeResponse:
    def __init__(self, status_code, payload=None):
        self.status_code = status_code
        self._payload = payload
        self.content = json.dumps(payload).encode("utf-8") if payload is not None else b""
        self.text = self.content.decode("utf-8")

    def json(self):
        if self._payload is None:
            raise ValueError("No JSON content")
        return self._payload


@pytest.fixture
def sent(monkeypatch):
    """Captures outgoing requests; set ``sent.response`` to control the reply."""
    class Recorder:
        calls = []
        response = FakeResponse(200, {})

    def fake_request(method, url, **kwargs):
        Recorder.calls.append((method, url, kwargs))
        return Recorder.response

    Recorder.calls = []
    monkeypatch.setattr(config, "ANYMESSAGE_CLI_API_BASE_URL", "http://api.test")
    monkeypatch.setattr(utils_cli.requests, "request", fake_request)
    return Recorder


def test_team_available(sent):
    sent.response = FakeResponse(200, {"subdomain": "acme", "available": True})

    result = runner.invoke(app, ["team", "available", "acme"])

    assert result.exit_code == 0
    assert "'acme' is available." in result.output
    method, url, kwargs = sent.calls[0]
    assert (method, url) == ("GET", "http://api.test/team/available")
    assert kwargs["params"] == {"subdomain": "acme"}


def test_team_taken(sent):
    sent.response = FakeResponse(200, {"subdomain": "acme", "available": False})

    result = runner.invoke(app, ["team", "available", "acme"])

    assert result.exit_code == 0
    assert "'acme' is taken." in result.output


def test_api_error_exits_with_message(sent):
    sent.response = FakeResponse(400, {"error": "newURL can only contain lowercase letters, numbers and dashes"})

    result = runner.invoke(app, ["team", "available", "Acme"])

    assert result.exit_code == 1
    assert "lowercase letters" in result.output


def test_user_register_sends_host_secret(sent, monkeypatch):
    monkeypatch.setattr(config, "ANYMESSAGE_CLI_HOST_APP_SECRET", "host-app-secret")
    sent.response = FakeResponse(200, {"auth_token": "tok", "email": "ada@acme.io", "message": "ok"})

    result = runner.invoke(app, ["user", "register", "ada@acme.io"])

    assert result.exit_code == 0
    method, url, kwargs = sent.calls[0]
    assert (method, url) == ("POST", "http://api.test/auth/register-user")
    assert kwargs["json"] == {"email": "ada@acme.io"}
    assert kwargs["headers"] == {"X-Host-App-Secret": "host-app-secret"}
    assert '"auth_token": "tok"' in result.output


def test_connection_error_exits(monkeypatch):
    def refuse(method, url, **kwargs):
        raise requests.exceptions.ConnectionError("refused")

    monkeypatch.setattr(utils_cli.requests, "request", refuse)

    result = runner.invoke(app, ["team", "available", "acme"])

    assert result.exit_code == 1
    assert "Could not connect" in result.output


def test_generate_key_prints_fernet_key():
    result = runner.invoke(app, ["generate-key"])

    assert result.exit_code == 0
    assert "ENCRYPTION_KEY" in result.output
