import logging
import smtplib
import ssl
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from email.utils import make_msgid

from warden_config.settings import Settings

logger = logging.getLogger(__name__)

VERIFICATION_SUBJECT = "Verify your email - {app_name}"

VERIFICATION_TEXT = """Hello,

Thanks for signing up for {app_name}.

Confirm your email address by opening the link below (valid for 48 hours):
{verification_link}

If you didn't create an account, you can safely ignore this email.

-- {app_name}
"""

VERIFICATION_HTML = """
<!DOCTYPE html>
<html>
<head>
    <meta charset="utf-8">
</head>
<body style="font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif; background-color: #f9fafb; margin: 0; padding: 20px;">
    <div style="max-width: 600px; margin: 0 auto; background-color: #ffffff; border-radius: 8px; padding: 40px;">
        <h2 style="color: #111827; margin-top: 0;">Verify your email</h2>
        <p style="color: #374151; line-height: 1.6;">Thanks for signing up for {app_name}. This link is valid for 48 hours.</p>
        <p style="margin: 30px 0; text-align: center;">
            <a href="{verification_link}" style="display: inline-block; padding: 14px 28px; background-color: #2563eb; color: #ffffff !important; text-decoration: none; border-radius: 6px; font-weight: 600;">Verify Email</a>
        </p>
        <p style="color: #6b7280; font-size: 14px;">Or copy and paste this link into your browser:</p>
        <p style="word-break: break-all; color: #2563eb; font-size: 14px;">{verification_link}</p>
    </div>
</body>
</html>
"""

PASSWORD_RESET_SUBJECT = "Password Reset Request - {app_name}"

PASSWORD_RESET_TEXT = """Hello,

You requested a password reset for your {app_name} account.

Click the link below to reset your password (valid for 1 hour):
{reset_link}

If you didn't request this, you can safely ignore this email.

-- {app_name}
"""

PASSWORD_RESET_HTML = """
<!DOCTYPE html>
<html>
<head>
    <meta charset="utf-8">
</head>
<body style="font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif; background-color: #f9fafb; margin: 0; padding: 20px;">
    <div style="max-width: 600px; margin: 0 auto; background-color: #ffffff; border-radius: 8px; padding: 40px;">
        <h2 style="color: #111827; margin-top: 0;">Password Reset Request</h2>
        <p style="color: #374151; line-height: 1.6;">Click the button below to reset your password. This link is valid for 1 hour.</p>
        <p style="margin: 30px 0; text-align: center;">
            <a href="{reset_link}" style="display: inline-block; padding: 14px 28px; background-color: #2563eb; color: #ffffff !important; text-decoration: none; border-radius: 6px; font-weight: 600;">Reset Password</a>
        </p>
        <p style="color: #6b7280; font-size: 14px;">Or copy and paste this link into your browser:</p>
        <p style="word-break: break-all; color: #2563eb; font-size: 14px;">{reset_link}</p>
        <p style="color: #9ca3af; font-size: 13px;">If you didn't request this, you can safely ignore this email.</p>
    </div>
</body>
</html>
"""


class EmailService:
    """Blocking SMTP sender.

    Send methods return the Message-ID of the delivered email, or None when
    nothing was sent. Delivery problems are logged and never raised.
    """

    def __init__(self, settings: Settings):
        self._settings = settings

    def _create_message(
        self,
        to_email: str,
        subject: str,
        text_body: str,
        html_body: str | None = None,
    ) -> MIMEMultipart:
        msg = MIMEMultipart("alternative")
        msg["Subject"] = subject
        msg["From"] = f"{self._settings.smtp_from_name} <{self._settings.smtp_from_email}>"
        msg["To"] = to_email
        msg["Message-ID"] = make_msgid(domain=self._settings.smtp_from_email.split("@")[-1])

        msg.attach(MIMEText(text_body, "plain"))
        if html_body:
            msg.attach(MIMEText(html_body, "html"))

        return msg

    def _send_email(self, to_email: str, message: MIMEMultipart) -> str | None:
        if not self._settings.smtp_host:
            logger.error("SMTP host not configured")
            return None

        smtp_password = (
            self._settings.smtp_password.get_secret_value()
            if self._settings.smtp_password
            else ""
        )

        try:
            if self._settings.smtp_use_tls and not self._settings.smtp_starttls:
                # Implicit TLS (port 465)
                context = ssl.create_default_context()
                with smtplib.SMTP_SSL(
                    self._settings.smtp_host,
                    self._settings.smtp_port,
                    context=context,
                ) as server:
                    if self._settings.smtp_user:
                        server.login(self._settings.smtp_user, smtp_password)
                    server.send_message(message)
            else:
                # STARTTLS (port 587) or plain
                with smtplib.SMTP(
                    self._settings.smtp_host,
                    self._settings.smtp_port,
                ) as server:
                    if self._settings.smtp_starttls:
                        context = ssl.create_default_context()
                        server.starttls(context=context)
                    if self._settings.smtp_user:
                        server.login(self._settings.smtp_user, smtp_password)
                    server.send_message(message)

        except (smtplib.SMTPException, OSError) as e:
            logger.error("Failed to send email to %s: %s", to_email, e)
            return None

        logger.info("Email sent to %s", to_email)
        return message["Message-ID"]

    def send_verification_email(
        self,
        to_email: str,
        verification_link: str,
    ) -> str | None:
        if not self._settings.smtp_enabled:
            logger.warning("SMTP disabled, skipping verification email to %s", to_email)
            return None

        app_name = self._settings.app_name
        message = self._create_message(
            to_email=to_email,
            subject=VERIFICATION_SUBJECT.format(app_name=app_name),
            text_body=VERIFICATION_TEXT.format(
                app_name=app_name,
                verification_link=verification_link,
            ),
            html_body=VERIFICATION_HTML.format(
                app_name=app_name,
                verification_link=verification_link,
            ),
        )

        return self._send_email(to_email, message)

    def send_password_reset_email(self, to_email: str, reset_link: str) -> str | None:
        if not self._settings.smtp_enabled:
            logger.warning("SMTP disabled, skipping password reset email to %s", to_email)
            return None

        app_name = self._settings.app_name
        message = self._create_message(
            to_email=to_email,
            subject=PASSWORD_RESET_SUBJECT.format(app_name=app_name),
            text_body=PASSWORD_RESET_TEXT.format(app_name=app_name, reset_link=reset_link),
            html_body=PASSWORD_RESET_HTML.format(app_name=app_name, reset_link=reset_link),
        )

        return self._send_email(to_email, message)
