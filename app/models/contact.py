"""Contact form models for the contact mailer API.

This module contains the Pydantic models for contact form submissions,
their validation results and the outcome reported back to the caller.
"""

from enum import Enum
from typing import Dict, List, Optional
from typing_extensions import Annotated
from pydantic import BaseModel, Field, ConfigDict

REQUIRED_FIELDS = ("full_name", "phone", "email")
OPTIONAL_FIELDS = (
    "what_describes_you_best",
    "YOE",
    "highest_qualification",
    "current_org",
    "location",
    "inquiry_details",
)
MULTILINE_FIELDS = frozenset({"inquiry_details"})
MISSING_VALUE_PLACEHOLDER = "-"


class SubmissionState(str, Enum):
    """Lifecycle of a single contact submission."""

    RECEIVED = "received"
    VALIDATING = "validating"
    REJECTED = "rejected"
    RENDERING = "rendering"
    SENDING = "sending"
    SENT = "sent"
    FAILED = "failed"


class ContactFormRequest(BaseModel):
    """Raw contact form fields as sent by the client, before validation.

    Numbers in a JSON body are kept as their string form so they go
    through the same format rules as form fields.
    """
    full_name: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    what_describes_you_best: Optional[str] = None
    YOE: Optional[str] = None
    highest_qualification: Optional[str] = None
    current_org: Optional[str] = None
    location: Optional[str] = None
    inquiry_details: Optional[str] = None

    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)


class ContactSubmission(BaseModel):
    """A validated contact form submission.

    Attributes:
        full_name: Full name of the person getting in touch
        phone: Phone number, 10 to 15 digits
        email: Email address for the reply
        what_describes_you_best: Optional self description
        YOE: Optional years of experience
        highest_qualification: Optional highest qualification
        current_org: Optional current organisation
        location: Optional location
        inquiry_details: Optional multi-line free text
    """
    full_name: Annotated[str, Field(..., min_length=1, description="Full name of the person getting in touch")]
    phone: Annotated[str, Field(..., min_length=1, description="Phone number, digits only")]
    email: Annotated[str, Field(..., min_length=1, description="Email address for the reply")]
    what_describes_you_best: Optional[str] = None
    YOE: Optional[str] = None
    highest_qualification: Optional[str] = None
    current_org: Optional[str] = None
    location: Optional[str] = None
    inquiry_details: Optional[str] = None

    model_config = ConfigDict(frozen=True)

    def field_values(self) -> Dict[str, Optional[str]]:
        """Return every known field in template order."""
        return {name: getattr(self, name) for name in REQUIRED_FIELDS + OPTIONAL_FIELDS}


class ContactAttachment(BaseModel):
    """File uploaded alongside a submission, passed through untouched."""
    content: bytes
    filename: str
    content_type: str
    size: Annotated[int, Field(..., ge=0)]

    model_config = ConfigDict(frozen=True)


class ValidationResult(BaseModel):
    """Either a valid submission or the list of field-level errors."""
    is_valid: bool
    submission: Optional[ContactSubmission] = None
    errors: List[str] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)

    @classmethod
    def valid(cls, submission: ContactSubmission) -> "ValidationResult":
        return cls(is_valid=True, submission=submission)

    @classmethod
    def invalid(cls, *errors: str) -> "ValidationResult":
        return cls(is_valid=False, errors=list(errors))


class RenderedEmail(BaseModel):
    """HTML body produced from a template.

    Attributes:
        html: The rendered HTML document
        values: Placeholder values as they were substituted, in template order
    """
    html: str
    values: List[str] = Field(default_factory=list)


class ContactOutcome(BaseModel):
    """Final result of handling a submission."""
    state: SubmissionState
    status_code: int
    message: Optional[str] = None
    error: Optional[str] = None

    def body(self) -> Dict[str, str]:
        if self.error is not None:
            return {"error": self.error}
        return {"message": self.message or ""}


class ContactFormResponse(BaseModel):
    """Response model for a successful submission."""
    message: str = Field(..., description="Confirmation message for the user")


class ErrorResponse(BaseModel):
    """Response model for a rejected or failed submission."""
    error: str = Field(..., description="Human readable error message")
