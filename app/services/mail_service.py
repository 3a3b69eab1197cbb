"""
MailService Module

This module composes MIME messages and delivers them through an SMTP
provider. The provider is picked from a table of well-known services by
name, or from explicit SMTP host settings.
"""

import asyncio
import smtplib
import logging
from email import encoders
from email.mime.base import MIMEBase
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from email.utils import formataddr, formatdate, make_msgid
from typing import Dict, Optional, Tuple

from app.core.config import settings, Settings
from app.models.mail import MailMessage

logger = logging.getLogger(__name__)

# name -> (host, port, implicit TLS)
WELL_KNOWN_SERVICES: Dict[str, Tuple[str, int, bool]] = {
    "gmail": ("smtp.gmail.com", 465, True),
    "googlemail": ("smtp.gmail.com", 465, True),
    "hotmail": ("smtp-mail.outlook.com", 587, False),
    "outlook": ("smtp-mail.outlook.com", 587, False),
    "outlook365": ("smtp.office365.com", 587, False),
    "yahoo": ("smtp.mail.yahoo.com", 465, True),
    "zoho": ("smtp.zoho.com", 465, True),
    "sendgrid": ("smtp.sendgrid.net", 587, False),
    "mailgun": ("smtp.mailgun.org", 465, True),
    "postmark": ("smtp.postmarkapp.com", 2525, False),
    "icloud": ("smtp.mail.me.com", 587, False),
}


class MailServiceError(Exception):
    """Raised when a message cannot be handed to the SMTP provider."""


class MailService:
    """Mail service delivering composed messages over SMTP."""

    def __init__(self, config: Settings = settings):
        self.config = config

    def resolve_smtp_server(self) -> Tuple[str, int, bool]:
        """
        Work out which SMTP server to talk to.

        Explicit SMTP_HOST settings win over the EMAIL_SERVICE lookup.

        Returns:
            Tuple of host, port and whether the connection uses implicit TLS.

        Raises:
            MailServiceError: If neither a host nor a known service is configured.
        """
        if self.config.SMTP_HOST:
            secure = self.config.SMTP_SECURE
            port = self.config.SMTP_PORT
            if secure is None:
                secure = port == 465
            if port is None:
                port = 465 if secure else 587
            return self.config.SMTP_HOST, port, secure

        service = (self.config.EMAIL_SERVICE or "").strip().lower()
        if service not in WELL_KNOWN_SERVICES:
            raise MailServiceError(f"Unknown email service: {self.config.EMAIL_SERVICE!r}")
        return WELL_KNOWN_SERVICES[service]

    def create_email_multipart_message(self, message: MailMessage) -> MIMEMultipart:
        """
        Creates a MIME multipart/mixed message with an HTML body and attachments.

        Attachments are added with their original content type and filename;
        their bytes are base64 encoded but otherwise untouched.

        Args:
            message (MailMessage): The composed message to serialise.

        Returns:
            MIMEMultipart: The constructed email message ready to be sent.
        """
        mime = MIMEMultipart("mixed")
        mime["Subject"] = message.subject

        # if sender_name is provided, the format will be '"Sender Name" <email@example.com>'
        if message.sender_name is None:
            mime["From"] = message.sender
        else:
            mime["From"] = formataddr((message.sender_name, message.sender))

        mime["To"] = ", ".join(message.recipients)
        mime["Date"] = formatdate(localtime=True)
        mime["Message-ID"] = make_msgid()

        mime.attach(MIMEText(message.html, "html", "utf-8"))

        for attachment in message.attachments:
            maintype, subtype = "application", "octet-stream"
            if attachment.content_type and "/" in attachment.content_type:
                maintype, subtype = attachment.content_type.split("/", 1)
            part = MIMEBase(maintype, subtype)
            part.set_payload(attachment.content)
            encoders.encode_base64(part)
            part.add_header(
                "Content-Disposition",
                "attachment",
                filename=attachment.filename,
            )
            mime.attach(part)

        logger.debug("Multipart message creation done!")
        return mime

    def _deliver(self, mime: MIMEMultipart, sender: str, recipients: list) -> None:
        host, port, secure = self.resolve_smtp_server()
        timeout = self.config.SMTP_TIMEOUT

        if secure:
            server = smtplib.SMTP_SSL(host, port, timeout=timeout)
        else:
            server = smtplib.SMTP(host, port, timeout=timeout)

        with server:
            if not secure:
                server.starttls()
            server.login(self.config.EMAIL_USER, self.config.EMAIL_PASS)
            server.send_message(mime, from_addr=sender, to_addrs=recipients)

    async def send_mail(self, message: MailMessage) -> str:
        """
        Sends a composed message through the configured SMTP provider.

        The blocking SMTP conversation runs in a worker thread so only the
        calling request waits on the network round-trip.

        Args:
            message (MailMessage): Message to deliver.

        Returns:
            str: The Message-ID header of the delivered message.

        Raises:
            MailServiceError: If credentials are missing or the provider rejects the message.
        """
        if not self.config.EMAIL_USER or not self.config.EMAIL_PASS:
            raise MailServiceError("SMTP credentials are not configured")
        if not message.recipients or not all(message.recipients):
            raise MailServiceError("No recipient configured for outgoing mail")

        mime = self.create_email_multipart_message(message)

        try:
            logger.info("Sending email via SMTP")
            await asyncio.to_thread(
                self._deliver, mime, message.sender, message.recipients
            )
        except (smtplib.SMTPException, OSError) as e:
            logger.error(f"Failed to send mail with error: {str(e)}")
            raise MailServiceError("SMTP delivery failed") from e

        message_id: Optional[str] = mime["Message-ID"]
        logger.info(f"Email sent successfully, message id {message_id}")
        return message_id


mail_service = MailService()
