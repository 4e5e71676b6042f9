"""Tests for confluence_rest.auth module."""

import base64

import pytest

from confluence_rest.auth import basic_auth_header, resolve_credentials
from confluence_rest.config import ConfluenceSettings
from confluence_rest.exceptions import CredentialsError


@pytest.fixture
def netrc_file(tmp_path):
    """A netrc file with an entry for wiki.example.com."""
    path = tmp_path / "netrc"
    path.write_text("machine wiki.example.com login bob password hunter2\n")
    path.chmod(0o600)
    return str(path)


class TestBasicAuthHeader:
    """Tests for basic_auth_header."""

    def test_encodes_username_and_password(self):
        """Header is 'Basic ' plus base64 of user:password."""
        header = basic_auth_header("alice", "s3cret")

        assert header.startswith("Basic ")
        assert base64.b64decode(header[6:]) == b"alice:s3cret"

    def test_handles_non_ascii(self):
        """Credentials are UTF-8 encoded before base64."""
        header = basic_auth_header("jörg", "pässword")

        assert base64.b64decode(header[6:]).decode("utf-8") == "jörg:pässword"


class TestResolveCredentials:
    """Tests for resolve_credentials."""

    def test_uses_configured_credentials(self, mock_settings):
        """Explicit username and password win."""
        assert resolve_credentials(mock_settings) == ("alice", "s3cret")

    def test_password_without_username_raises(self):
        """A password alone is not enough."""
        settings = ConfluenceSettings(url="https://wiki.example.com", password="x")

        with pytest.raises(CredentialsError):
            resolve_credentials(settings)

    def test_falls_back_to_netrc(self, netrc_file):
        """Without a password the host is looked up in netrc."""
        settings = ConfluenceSettings(url="https://wiki.example.com/confluence")

        assert resolve_credentials(settings, netrc_file) == ("bob", "hunter2")

    def test_netrc_login_wins_over_configured_username(self, netrc_file):
        """The netrc login replaces a mismatched configured username."""
        settings = ConfluenceSettings(url="https://wiki.example.com", username="alice")

        assert resolve_credentials(settings, netrc_file) == ("bob", "hunter2")

    def test_no_netrc_entry_raises(self, netrc_file):
        """An unknown host raises CredentialsError."""
        settings = ConfluenceSettings(url="https://other.example.com")

        with pytest.raises(CredentialsError) as exc_info:
            resolve_credentials(settings, netrc_file)

        assert "other.example.com" in str(exc_info.value)

    def test_missing_netrc_file_raises(self, tmp_path):
        """A missing netrc file raises CredentialsError."""
        settings = ConfluenceSettings(url="https://wiki.example.com")

        with pytest.raises(CredentialsError):
            resolve_credentials(settings, str(tmp_path / "absent"))

    def test_unreadable_netrc_raises(self, tmp_path):
        """A netrc path that can't be read raises CredentialsError."""
        settings = ConfluenceSettings(url="https://wiki.example.com")

        with pytest.raises(CredentialsError):
            resolve_credentials(settings, str(tmp_path))
