"""Outgoing mail models for the contact mailer API."""

from typing import List, Optional
from pydantic import BaseModel, Field

from app.models.contact import ContactAttachment


class MailMessage(BaseModel):
    """
    A composed email ready to be handed to the SMTP transport.

    Attributes:
        sender (str): Address the email is sent from.
        sender_name (Optional[str]): Display name shown next to the sender address.
        recipients (List[str]): Primary recipient addresses.
        subject (str): Subject line.
        html (str): Rendered HTML body.
        attachments (List[ContactAttachment]): Files attached as-is.
    """

    sender: str
    sender_name: Optional[str] = None
    recipients: List[str]
    subject: str
    html: str
    attachments: List[ContactAttachment] = Field(default_factory=list)
