"""
ContactService Module

This module handles contact form submissions end to end: validation,
escaping, rendering the notification email and handing it to the mail
transport.
"""

import logging
from typing import Dict, Mapping, Optional

from pydantic import BaseModel, ConfigDict

from app.core.config import settings, Settings
from app.models.contact import (
    ContactAttachment,
    ContactOutcome,
    ContactSubmission,
    MULTILINE_FIELDS,
    OPTIONAL_FIELDS,
    REQUIRED_FIELDS,
    SubmissionState,
)
from app.models.mail import MailMessage
from app.services.mail_service import MailService, mail_service
from app.services.template_service import TemplateService, template_service
from app.utils.helper_functions import escape_html, nl2br
from app.utils.validators import validate_submission

logger = logging.getLogger(__name__)

SUCCESS_MESSAGE = "✅ Submission successful. We will contact you soon!"
INTERNAL_ERROR_MESSAGE = "Internal server error"


class ContactConfig(BaseModel):
    """Read-only mail settings the handler needs, resolved once at startup."""
    sender_address: Optional[str] = None
    sender_name: str = "Website Contact"
    recipient: Optional[str] = None
    subject: str = "New Contact Submission"
    template_name: str = "contactUs.html"

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_settings(cls, config: Settings) -> "ContactConfig":
        return cls(
            sender_address=config.EMAIL_USER,
            sender_name=config.EMAIL_SENDER_NAME,
            recipient=config.RECEIVER_EMAIL,
            subject=config.CONTACT_SUBJECT,
        )


def escape_submission(submission: ContactSubmission) -> Dict[str, Optional[str]]:
    """Escape every field value once, turning newlines into <br/> for long text."""
    escaped = {}
    for name, value in submission.field_values().items():
        if value is None:
            escaped[name] = None
            continue
        value = escape_html(value)
        escaped[name] = nl2br(value) if name in MULTILINE_FIELDS else value
    return escaped


class ContactService:
    """Stateless handler for contact form submissions."""

    def __init__(
        self,
        config: ContactConfig,
        mail: MailService = mail_service,
        templates: TemplateService = template_service,
    ):
        self.config = config
        self.mail_service = mail
        self.template_service = templates

    @staticmethod
    def _outcome(state: SubmissionState, status_code: int, **kwargs) -> ContactOutcome:
        return ContactOutcome(state=state, status_code=status_code, **kwargs)

    async def handle(
        self,
        raw_fields: Mapping[str, Optional[str]],
        attachment: Optional[ContactAttachment] = None,
    ) -> ContactOutcome:
        """
        Validate, render and send a contact submission.

        Args:
            raw_fields: Submitted form fields, values may be missing
            attachment: Optional file already accepted by the upload layer

        Returns:
            ContactOutcome carrying the terminal state, HTTP status and body
        """
        state = SubmissionState.RECEIVED
        try:
            fields = {name: raw_fields.get(name) for name in REQUIRED_FIELDS + OPTIONAL_FIELDS}

            state = SubmissionState.VALIDATING
            result = validate_submission(fields)
            if not result.is_valid:
                logger.info(f"Contact submission rejected: {result.errors[0]}")
                return self._outcome(
                    SubmissionState.REJECTED, 400, error=result.errors[0]
                )

            state = SubmissionState.RENDERING
            rendered = self.template_service.render_template(
                self.config.template_name, escape_submission(result.submission)
            )

            attachments = []
            if attachment is not None:
                attachments.append(attachment)

            message = MailMessage(
                sender=self.config.sender_address or "",
                sender_name=self.config.sender_name,
                recipients=[self.config.recipient or ""],
                subject=self.config.subject,
                html=rendered.html,
                attachments=attachments,
            )

            state = SubmissionState.SENDING
            await self.mail_service.send_mail(message)

        except Exception:
            logger.exception(f"Error /contactus while {state.value}")
            return self._outcome(
                SubmissionState.FAILED, 500, error=INTERNAL_ERROR_MESSAGE
            )

        logger.info(
            f"Contact submission sent (attachments={len(attachments)})"
        )
        return self._outcome(SubmissionState.SENT, 200, message=SUCCESS_MESSAGE)


contact_service = ContactService(ContactConfig.from_settings(settings))
