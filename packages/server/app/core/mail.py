"""
Outbound mail (fastapi-mail over SMTP).
"""

from __future__ import annotations

from functools import lru_cache
from html import escape

import structlog
from fastapi_mail import ConnectionConfig, FastMail, MessageSchema, MessageType

from app.core.config import Settings, get_settings

log = structlog.get_logger()

INVITATION_SUBJECT = "[Huddle] You have been invited to {team_name}"

INVITATION_BODY = """\
<p>You have been invited to join <strong>{team_name}</strong> on Huddle.</p>
<p><a href="{url}">Accept the invitation</a></p>
<p>If the button does not work, open this link: {url}</p>
"""


def build_connection_config(settings: Settings) -> ConnectionConfig:
    return ConnectionConfig(
        MAIL_USERNAME=settings.mail_username,
        MAIL_PASSWORD=settings.mail_password,
        MAIL_FROM=settings.mail_from,
        MAIL_FROM_NAME=settings.mail_from_name,
        MAIL_PORT=settings.mail_port,
        MAIL_SERVER=settings.mail_server,
        MAIL_STARTTLS=settings.mail_starttls,
        MAIL_SSL_TLS=settings.mail_ssl_tls,
        USE_CREDENTIALS=bool(settings.mail_username),
        VALIDATE_CERTS=True,
    )


class MailService:
    """Sends the transactional mails the team workflow needs."""

    def __init__(self, client: FastMail):
        self._client = client

    async def send_team_member_invitation_link(
        self, email: str, url: str, team_name: str
    ) -> None:
        message = MessageSchema(
            subject=INVITATION_SUBJECT.format(team_name=team_name),
            recipients=[email],
            body=INVITATION_BODY.format(team_name=escape(team_name), url=escape(url, quote=True)),
            subtype=MessageType.html,
        )
        await self._client.send_message(message)
        log.info("mail.invitation_sent", recipient=email, team_name=team_name)


@lru_cache
def get_mail_service() -> MailService:
    """FastAPI dependency; overridden in tests."""
    return MailService(FastMail(build_connection_config(get_settings())))
