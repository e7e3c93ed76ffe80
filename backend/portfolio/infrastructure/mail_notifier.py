"""Mail Notifiers — SMTP delivery for contact notifications.

Invariants:
    - SmtpMailNotifier.send raises NotificationError on ANY delivery failure
      (connect, STARTTLS, auth, recipient refused, timeout)
    - DisabledMailNotifier never raises; it only logs the skipped message
    - Messages carry a plain-text part and an HTML alternative

Design Decisions:
    - aiosmtplib over smtplib: the send is awaited on the event loop, no thread pool
    - One connection per message: two messages per submission, pooling buys nothing
    - build_mail_notifier picks the implementation from settings, so callers never
      branch on "is mail configured"
"""

import logging
from email.message import EmailMessage
from email.utils import formataddr, formatdate, make_msgid

import aiosmtplib

from portfolio.config import Settings
from portfolio.core.domain_types import OutgoingMail
from portfolio.core.errors import NotificationError

logger = logging.getLogger(__name__)


class SmtpMailNotifier:
    """Sends mail through an authenticated STARTTLS relay."""

    def __init__(
        self,
        host: str,
        port: int,
        username: str,
        password: str,
        timeout_seconds: float = 10.0,
    ):
        self.host = host
        self.port = port
        self.username = username
        self.password = password
        self.timeout_seconds = timeout_seconds

    def build_message(self, mail: OutgoingMail) -> EmailMessage:
        message = EmailMessage()
        message["From"] = formataddr((mail.sender_name, self.username))
        message["To"] = mail.to
        message["Subject"] = mail.subject
        message["Date"] = formatdate(localtime=True)
        message["Message-ID"] = make_msgid()
        if mail.reply_to:
            message["Reply-To"] = mail.reply_to
        message.set_content(mail.text)
        message.add_alternative(mail.html, subtype="html")
        return message

    async def send(self, mail: OutgoingMail) -> None:
        message = self.build_message(mail)
        try:
            await aiosmtplib.send(
                message,
                hostname=self.host,
                port=self.port,
                username=self.username,
                password=self.password,
                start_tls=True,
                timeout=self.timeout_seconds,
            )
        except (aiosmtplib.SMTPException, OSError) as e:
            raise NotificationError(str(e), mail.to) from e
        logger.info("Mail delivered", extra={"recipient": mail.to})


class DisabledMailNotifier:
    """Stand-in used when SMTP credentials are not configured."""

    async def send(self, mail: OutgoingMail) -> None:
        logger.info(
            "Mail disabled, skipping notification",
            extra={"recipient": mail.to},
        )


def build_mail_notifier(settings: Settings) -> SmtpMailNotifier | DisabledMailNotifier:
    if not settings.mail_enabled:
        return DisabledMailNotifier()
    return SmtpMailNotifier(
        host=settings.smtp_host,
        port=settings.smtp_port,
        username=settings.smtp_user,
        password=settings.smtp_password,
        timeout_seconds=settings.smtp_timeout_seconds,
    )
