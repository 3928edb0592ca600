"""
Email Sender Implementations

SmtpEmailSender delivers through a plain SMTP relay on a worker thread so
the event loop never blocks on the socket. LoggingEmailSender only logs,
for local development and tests.
"""

import asyncio
import logging
import smtplib
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from email.utils import formataddr
from typing import Optional

from src.app.services.email_sender import IEmailSender

logger = logging.getLogger(__name__)


class SmtpEmailSender(IEmailSender):
    def __init__(
        self,
        host: str,
        port: int,
        from_address: str,
        from_name: str = "",
        username: Optional[str] = None,
        password: Optional[str] = None,
        use_tls: bool = True,
        timeout: float = 30,
    ):
        self.host = host
        self.port = port
        self.from_address = from_address
        self.from_name = from_name
        self.username = username
        self.password = password
        self.use_tls = use_tls
        self.timeout = timeout

    def _build_message(self, to: str, subject: str, html_body: str) -> MIMEMultipart:
        message = MIMEMultipart("alternative")
        message["Subject"] = subject
        message["From"] = formataddr((self.from_name, self.from_address))
        message["To"] = to
        message.attach(MIMEText(html_body, "html", "utf-8"))
        return message

    def _send_sync(self, message: MIMEMultipart) -> None:
        with smtplib.SMTP(self.host, self.port, timeout=self.timeout) as server:
            if self.use_tls:
                server.starttls()
            if self.username and self.password:
                server.login(self.username, self.password)
            server.send_message(message)

    async def send(self, to: str, subject: str, html_body: str) -> None:
        message = self._build_message(to, subject, html_body)
        await asyncio.to_thread(self._send_sync, message)
        logger.info(f"Email sent to {to}: {subject}")


class LoggingEmailSender(IEmailSender):
    """Logs emails instead of sending them"""

    def __init__(self, from_address: str = "no-reply@localhost"):
        self.from_address = from_address

    async def send(self, to: str, subject: str, html_body: str) -> None:
        logger.info(f"EMAIL (not sent) from={self.from_address} to={to} subject={subject}")
        logger.debug(html_body)
