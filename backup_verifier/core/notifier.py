"""Timeout notification by email.

The EmailNotifier mails the run log to an operator when polling times out.
It only sends when recipient, sender and SMTP server are all configured;
otherwise it records each missing value in the run log and returns.
Transport errors are not handled here.
"""

import logging
import smtplib
from email.message import EmailMessage
from pathlib import Path
from typing import Callable, List, Optional, Union

from backup_verifier.config.constants import DEFAULT_SMTP_PORT, LOG_MESSAGES
from backup_verifier.core.models import NotificationRequest
from backup_verifier.core.run_log import RunLogger
from backup_verifier.core.security import SMTPCredentials

logger = logging.getLogger(__name__)


class EmailNotifier:
    """Send the run log to an operator.

    Attributes:
        run_log: Run logger for notification outcome lines.
        to_addrs: Recipient addresses (empty means not configured).
        from_addr: Sender address.
        smtp_server: SMTP host name.
        smtp_port: SMTP port.
        credentials: Optional SMTP login; enables STARTTLS and login.
        smtp_factory: Callable returning an smtplib.SMTP-like client
            (smtplib.SMTP when not given).
    """

    def __init__(
        self,
        run_log: RunLogger,
        to_addrs: Optional[List[str]] = None,
        from_addr: Optional[str] = None,
        smtp_server: Optional[str] = None,
        smtp_port: int = DEFAULT_SMTP_PORT,
        credentials: Optional[SMTPCredentials] = None,
        smtp_factory: Optional[Callable[..., smtplib.SMTP]] = None,
    ) -> None:
        self.run_log = run_log
        self.to_addrs = list(to_addrs or [])
        self.from_addr = from_addr
        self.smtp_server = smtp_server
        self.smtp_port = smtp_port
        self.credentials = credentials
        self.smtp_factory = smtp_factory or smtplib.SMTP

    def missing_settings(self) -> List[str]:
        """Return a log message for every missing setting, in To, From, SMTP order."""
        missing = []
        if not self.to_addrs:
            missing.append(LOG_MESSAGES["NO_RECIPIENT"])
        if not self.from_addr:
            missing.append(LOG_MESSAGES["NO_SENDER"])
        if not self.smtp_server:
            missing.append(LOG_MESSAGES["NO_SMTP"])
        return missing

    def build_request(self, subject: str, log_path: Path) -> NotificationRequest:
        return NotificationRequest(
            subject=subject, body_source_path=log_path, attachment_path=log_path
        )

    def build_message(
        self, subject: str, log_contents: str, attachment_path: Union[str, Path]
    ) -> EmailMessage:
        """Build a high-priority message with the log attached."""
        attachment_path = Path(attachment_path)
        message = EmailMessage()
        message["Subject"] = subject
        message["From"] = self.from_addr
        message["To"] = ", ".join(self.to_addrs)
        message["X-Priority"] = "1"
        message["Importance"] = "High"
        message.set_content(log_contents)

        if attachment_path.exists():
            message.add_attachment(
                attachment_path.read_bytes(),
                maintype="text",
                subtype="plain",
                filename=attachment_path.name,
            )
        else:
            logger.warning(f"Attachment not found, sending without it: {attachment_path}")
        return message

    def notify(
        self, subject: str, log_contents: str, attachment_path: Union[str, Path]
    ) -> bool:
        """Send the notification if fully configured.

        Args:
            subject: Message subject (may be empty).
            log_contents: Message body.
            attachment_path: File attached to the message.

        Returns:
            True if a message was handed to the SMTP server.

        Raises:
            smtplib.SMTPException, OSError: On transport failure.
        """
        missing = self.missing_settings()
        if missing:
            for message in missing:
                self.run_log.write(message)
            return False

        message = self.build_message(subject, log_contents, attachment_path)
        with self.smtp_factory(self.smtp_server, self.smtp_port) as smtp:
            if self.credentials is not None:
                smtp.starttls()
                smtp.login(self.credentials.username, self.credentials.password)
            smtp.send_message(message)

        self.run_log.write(
            LOG_MESSAGES["NOTIFICATION_SENT"].format(to=", ".join(self.to_addrs))
        )
        return True

