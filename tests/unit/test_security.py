"""
Unit tests for SMTP credential loading.
"""

from unittest.mock import patch

from backup_verifier.core.security import (
    SMTPCredentials,
    load_secret,
    load_smtp_credentials,
)


class TestLoadSecret:
    def test_from_environment(self, monkeypatch):
        monkeypatch.setenv("SMTP_USERNAME", "  relay-user ")
        assert load_secret("SMTP_USERNAME") == "relay-user"

    def test_from_env_file(self, tmp_path, monkeypatch):
        monkeypatch.delenv("SMTP_USERNAME", raising=False)
        env_file = tmp_path / ".env"
        env_file.write_text("SMTP_USERNAME=file-user\n")

        try:
            assert load_secret("SMTP_USERNAME", env_file=env_file) == "file-user"
        finally:
            monkeypatch.delenv("SMTP_USERNAME", raising=False)

    def test_missing_returns_none(self, monkeypatch):
        monkeypatch.delenv("SMTP_USERNAME", raising=False)
        with patch("backup_verifier.core.security.load_dotenv"):
            assert load_secret("SMTP_USERNAME") is None


class TestLoadSMTPCredentials:
    def test_no_username_means_no_login(self, monkeypatch):
        monkeypatch.delenv("SMTP_USERNAME", raising=False)
        with patch("backup_verifier.core.security.load_dotenv"):
            assert load_smtp_credentials() is None

    def test_username_and_password(self, monkeypatch):
        monkeypatch.setenv("SMTP_USERNAME", "user")
        monkeypatch.setenv("SMTP_PASSWORD", "secret")
        assert load_smtp_credentials() == SMTPCredentials("user", "secret")

    def test_username_without_password(self, monkeypatch):
        monkeypatch.setenv("SMTP_USERNAME", "user")
        monkeypatch.delenv("SMTP_PASSWORD", raising=False)
        with patch("backup_verifier.core.security.load_dotenv"):
            assert load_smtp_credentials() == SMTPCredentials("user", "")
