"""Field validation for contact form submissions.

Rules run in a fixed order and the first failing rule decides the single
error reported back to the caller.
"""

import re
from typing import Callable, List, Mapping, Optional, Tuple

from app.models.contact import (
    ContactSubmission,
    OPTIONAL_FIELDS,
    REQUIRED_FIELDS,
    ValidationResult,
)

MISSING_REQUIRED_MESSAGE = "Full Name, Phone Number and Email are required"
INVALID_EMAIL_MESSAGE = "Invalid email format"
INVALID_PHONE_MESSAGE = "Invalid phone number"

EMAIL_PATTERN = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")
PHONE_PATTERN = re.compile(r"[0-9]{10,15}")

RawFields = Mapping[str, Optional[str]]


def has_required_fields(fields: RawFields) -> bool:
    return all(fields.get(name) for name in REQUIRED_FIELDS)


def is_valid_email(fields: RawFields) -> bool:
    return EMAIL_PATTERN.fullmatch(fields.get("email") or "") is not None


def is_valid_phone(fields: RawFields) -> bool:
    return PHONE_PATTERN.fullmatch(fields.get("phone") or "") is not None


VALIDATION_RULES: List[Tuple[Callable[[RawFields], bool], str]] = [
    (has_required_fields, MISSING_REQUIRED_MESSAGE),
    (is_valid_email, INVALID_EMAIL_MESSAGE),
    (is_valid_phone, INVALID_PHONE_MESSAGE),
]


def validate_submission(fields: RawFields) -> ValidationResult:
    """Validate raw form fields and build an immutable submission.

    Args:
        fields: Mapping of field name to the raw submitted string, or None

    Returns:
        ValidationResult holding either the submission or the first error
    """
    for rule, message in VALIDATION_RULES:
        if not rule(fields):
            return ValidationResult.invalid(message)

    known = {name: fields.get(name) for name in REQUIRED_FIELDS + OPTIONAL_FIELDS}
    return ValidationResult.valid(ContactSubmission(**known))
