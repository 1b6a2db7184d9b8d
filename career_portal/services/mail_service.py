"""
Outgoing mail - password reset links via fastapi-mail.

When MAIL_SERVER is not set the message is logged (without the token) and
skipped, so local development works without SMTP.
"""

import logging

from fastapi_mail import ConnectionConfig, FastMail, MessageSchema
from fastapi_mail.errors import ConnectionErrors

from career_portal.core.config import get_settings

settings = get_settings()
logger = logging.getLogger(__name__)


reset_template = """
<!DOCTYPE html>
<html>
<body>
  <div style="max-width: 600px; margin: 0 auto; background: white; padding: 30px; border-radius: 8px; font-family: Arial, sans-serif;">
    <h2 style="color: #0ea5e9; text-align: center;">Reset your password</h2>
    <div style="font-size: 16px; color: #333; line-height: 1.6;">
      <p>Hi,</p>
      <p>We received a request to reset the password for your Career Portal account.</p>
      <p style="text-align: center; margin-top: 20px;">
        <a href="{link}" style="display: inline-block; background-color: #0ea5e9; color: white; padding: 10px 20px; text-decoration: none; border-radius: 5px;">Choose a new password</a>
      </p>
      <p>This link expires in {minutes} minutes. If you did not ask for a reset, you can ignore this e-mail.</p>
    </div>
  </div>
</body>
</html>
"""


def get_mail_config() -> ConnectionConfig:
    return ConnectionConfig(
        MAIL_USERNAME=settings.mail_username,
        MAIL_PASSWORD=settings.mail_password,
        MAIL_FROM=settings.mail_from,
        MAIL_PORT=settings.mail_port,
        MAIL_SERVER=settings.mail_server,
        MAIL_STARTTLS=True,
        MAIL_SSL_TLS=False,
        USE_CREDENTIALS=bool(settings.mail_username),
        VALIDATE_CERTS=True
    )


def build_reset_link(token: str) -> str:
    return f"{settings.frontend_url.rstrip('/')}/reset-password?token={token}"


async def send_password_reset_email(email: str, token: str) -> bool:
    """Send the reset link. Returns False when mail is off or delivery failed."""
    if not settings.mail_configured:
        logger.info("Mail not configured; skipping password reset e-mail to %s", email)
        return False

    message = MessageSchema(
        subject="Reset your Career Portal password",
        recipients=[email],
        body=reset_template.format(
            link=build_reset_link(token),
            minutes=settings.password_reset_expire_minutes
        ),
        subtype="html"
    )

    fm = FastMail(get_mail_config())
    try:
        await fm.send_message(message)
    except ConnectionErrors as e:
        logger.warning("Failed to send password reset e-mail to %s: %s", email, e)
        return False
    logger.info("Password reset e-mail sent to %s", email)
    return True
