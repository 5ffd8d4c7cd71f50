"""SMTP mail transport."""

import asyncio
import logging
import smtplib
import ssl
from email.message import EmailMessage

from app.schemas.emailSchema import MailMessage
from app.services.MailTransport import MailTransport, TransmissionError, describe_error

logger = logging.getLogger(__name__)

# Share of MAIL_SEND_TIMEOUT allowed for each blocking socket operation
SOCKET_TIMEOUT_SHARE = 0.25


class SmtpMailTransport(MailTransport):
    """
    Send mail through an SMTP server.

    With secure=True the connection uses implicit TLS (usually port 465).
    Otherwise a plain connection is opened and upgraded with STARTTLS when
    the server advertises it (usually port 587).

    smtplib is blocking, so every delivery runs in a worker thread. Cancelling
    the awaiting coroutine does not stop that thread, so the socket timeout
    built by from_settings is a fraction of MAIL_SEND_TIMEOUT: a stalled
    session fails in the thread before the caller gives up waiting.
    """

    name = "smtp"

    def __init__(
        self,
        host: str,
        port: int,
        secure: bool = True,
        username: str = None,
        password: str = None,
        timeout: float = 30.0
    ):
        self.host = host
        self.port = port
        self.secure = secure
        self.username = username or None
        self.password = password or ""
        self.timeout = timeout

    @classmethod
    def from_settings(cls, settings) -> "SmtpMailTransport":
        return cls(
            host=settings.SMTP_RESOLVED_HOST,
            port=settings.SMTP_RESOLVED_PORT,
            secure=settings.SMTP_RESOLVED_SECURE,
            username=settings.SMTP_USERNAME,
            password=settings.SMTP_PASSWORD,
            timeout=settings.MAIL_SEND_TIMEOUT * SOCKET_TIMEOUT_SHARE
        )

    def build_message(self, message: MailMessage) -> EmailMessage:
        email_message = EmailMessage()
        email_message["From"] = message.sender
        email_message["To"] = message.to
        email_message["Subject"] = message.subject
        if message.reply_to:
            email_message["Reply-To"] = message.reply_to
        email_message.set_content(message.body)
        return email_message

    def _connect(self) -> smtplib.SMTP:
        context = ssl.create_default_context()
        if self.secure:
            return smtplib.SMTP_SSL(self.host, self.port, timeout=self.timeout, context=context)

        server = smtplib.SMTP(self.host, self.port, timeout=self.timeout)
        try:
            server.ehlo()
            if server.has_extn("starttls"):
                server.starttls(context=context)
                server.ehlo()
        except Exception:
            server.close()
            raise
        return server

    def _deliver(self, email_message: EmailMessage) -> None:
        with self._connect() as server:
            if self.username:
                server.login(self.username, self.password)
            server.send_message(email_message)

    async def send(self, message: MailMessage) -> None:
        email_message = self.build_message(message)

        try:
            await asyncio.to_thread(self._deliver, email_message)
        except OSError as e:
            # smtplib.SMTPException is an OSError too
            logger.error(f"❌ [SMTP] Failed to send email via {self.host}:{self.port}: {e}")
            raise TransmissionError(describe_error(e)) from e

        logger.info(f"✅ [SMTP] Email sent to {message.to} via {self.host}:{self.port}")
