"""Unit tests for the SMTP EmailService."""

import smtplib
from unittest.mock import MagicMock, patch

from pydantic import SecretStr

from warden_config.settings import Settings
from warden_identity.infrastructure.email import EmailService

RESET_LINK = "https://app.example.com/reset-password?token=abc"
VERIFY_LINK = "https://app.example.com/verify-email?token=abc"


def _settings(**overrides) -> Settings:
    values = {
        "smtp_enabled": True,
        "smtp_host": "smtp.example.com",
        "smtp_port": 587,
        "smtp_user": "mailer",
        "smtp_password": SecretStr("pw"),
        "smtp_from_email": "noreply@example.com",
        "smtp_starttls": True,
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


class TestEmailService:
    """Tests for message building and delivery outcome."""

    def test_disabled_smtp_sends_nothing(self):
        service = EmailService(_settings(smtp_enabled=False))

        with patch("smtplib.SMTP") as smtp:
            result = service.send_verification_email("a@b.co", VERIFY_LINK)

        assert result is None
        smtp.assert_not_called()

    def test_missing_host_sends_nothing(self):
        service = EmailService(_settings(smtp_host=""))

        assert service.send_password_reset_email("a@b.co", RESET_LINK) is None

    def test_starttls_delivery_returns_message_id(self):
        service = EmailService(_settings())
        server = MagicMock()

        with patch("smtplib.SMTP") as smtp:
            smtp.return_value.__enter__.return_value = server
            result = service.send_password_reset_email("a@b.co", RESET_LINK)

        smtp.assert_called_once_with("smtp.example.com", 587)
        server.starttls.assert_called_once()
        server.login.assert_called_once_with("mailer", "pw")
        message = server.send_message.call_args.args[0]
        assert message["To"] == "a@b.co"
        assert "Password Reset" in message["Subject"]
        assert RESET_LINK in message.as_string()
        assert result == message["Message-ID"]
        assert result.endswith("@example.com>")

    def test_implicit_tls_uses_smtp_ssl(self):
        service = EmailService(_settings(smtp_port=465, smtp_starttls=False))

        with patch("smtplib.SMTP_SSL") as smtp_ssl:
            server = smtp_ssl.return_value.__enter__.return_value
            result = service.send_verification_email("a@b.co", VERIFY_LINK)

        assert result is not None
        server.send_message.assert_called_once()

    def test_delivery_failure_logged_not_raised(self, caplog):
        service = EmailService(_settings())

        with patch("smtplib.SMTP", side_effect=smtplib.SMTPConnectError(421, "down")):
            result = service.send_verification_email("a@b.co", VERIFY_LINK)

        assert result is None
        assert "Failed to send email" in caplog.text
