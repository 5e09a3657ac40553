"""Tests for loading OAuth credentials."""
from unittest.mock import MagicMock

import pytest
from google.auth.exceptions import RefreshError
from oauthlib.oauth2.rfc6749.errors import AccessDeniedError

import auth
from errors import AuthError


@pytest.fixture
def google(monkeypatch):
    credentials_class = MagicMock()
    flow_class = MagicMock()
    monkeypatch.setattr(auth, "Credentials", credentials_class)
    monkeypatch.setattr(auth, "InstalledAppFlow", flow_class)
    monkeypatch.setattr(auth, "Request", MagicMock())
    return credentials_class, flow_class


def test_uses_valid_cached_token(google, tmp_path):
    credentials_class, flow_class = google
    token_file = tmp_path / "token.json"
    token_file.write_text("{}")
    cached = credentials_class.from_authorized_user_file.return_value
    cached.valid = True

    credentials = auth.get_credentials(str(token_file), str(tmp_path / "credentials.json"))

    assert credentials is cached
    flow_class.from_client_secrets_file.assert_not_called()
    assert token_file.read_text() == "{}"


def test_refreshes_expired_token(google, tmp_path):
    credentials_class, flow_class = google
    token_file = tmp_path / "token.json"
    token_file.write_text("{}")
    cached = credentials_class.from_authorized_user_file.return_value
    cached.valid = False
    cached.expired = True
    cached.refresh_token = "refresh"
    cached.to_json.return_value = '{"token": "new"}'

    assert auth.get_credentials(str(token_file), str(tmp_path / "credentials.json")) is cached

    cached.refresh.assert_called_once()
    flow_class.from_client_secrets_file.assert_not_called()
    assert token_file.read_text() == '{"token": "new"}'


def test_runs_flow_without_token(google, tmp_path):
    credentials_class, flow_class = google
    token_file = tmp_path / "token.json"
    new = flow_class.from_client_secrets_file.return_value.run_local_server.return_value
    new.to_json.return_value = '{"token": "fresh"}'

    assert auth.get_credentials(str(token_file), "client.json", ["scope"]) is new

    credentials_class.from_authorized_user_file.assert_not_called()
    flow_class.from_client_secrets_file.assert_called_once_with("client.json", ["scope"])
    assert token_file.read_text() == '{"token": "fresh"}'


def test_missing_client_secrets(google, tmp_path):
    _, flow_class = google
    flow_class.from_client_secrets_file.side_effect = FileNotFoundError("client.json")

    with pytest.raises(AuthError, match="client.json was not found"):
        auth.get_credentials(str(tmp_path / "token.json"), "client.json")
    assert not (tmp_path / "token.json").exists()


def test_failed_refresh(google, tmp_path):
    credentials_class, _ = google
    token_file = tmp_path / "token.json"
    token_file.write_text("{}")
    cached = credentials_class.from_authorized_user_file.return_value
    cached.valid = False
    cached.expired = True
    cached.refresh_token = "refresh"
    cached.refresh.side_effect = RefreshError("invalid_grant")

    with pytest.raises(AuthError, match="Authorization failed"):
        auth.get_credentials(str(token_file), "client.json")


def test_denied_consent(google, tmp_path):
    _, flow_class = google
    flow_class.from_client_secrets_file.return_value.run_local_server.side_effect = AccessDeniedError()

    with pytest.raises(AuthError, match="Authorization failed"):
        auth.get_credentials(str(tmp_path / "token.json"), "client.json")
    assert not (tmp_path / "token.json").exists()


def test_malformed_client_secrets(google, tmp_path):
    _, flow_class = google
    flow_class.from_client_secrets_file.side_effect = ValueError("Client secrets must be for a web or installed app.")

    with pytest.raises(AuthError, match="client.json is not a valid client secrets file"):
        auth.get_credentials(str(tmp_path / "token.json"), "client.json")
