from enum import Enum


class ContactTestConstants(Enum):
    SENDER_ADDRESS = "website@sathiplanners.com"
    RECEIVER_ADDRESS = "inbox@sathiplanners.com"
    VALID_FORM = {
        "full_name": "Jane Doe",
        "phone": "9876543210",
        "email": "jane@x.com",
    }
    FULL_FORM = {
        "full_name": "Jane Doe",
        "phone": "9876543210",
        "email": "jane@x.com",
        "what_describes_you_best": "Working professional",
        "YOE": "5",
        "highest_qualification": "B.Tech",
        "current_org": "Acme & Sons",
        "location": "Pune",
        "inquiry_details": "Looking for guidance.\nPrefer evenings.",
    }
    PDF_FILENAME = "resume.pdf"
    PDF_CONTENT = b"%PDF-1.4\n1 0 obj<</Type/Catalog>>endobj\ntrailer<</Root 1 0 R>>\n%%EOF"
    PDF_CONTENT_TYPE = "application/pdf"
    SUCCESS_MESSAGE = "✅ Submission successful. We will contact you soon!"
    MISSING_REQUIRED_MESSAGE = "Full Name, Phone Number and Email are required"
    INVALID_EMAIL_MESSAGE = "Invalid email format"
    INVALID_PHONE_MESSAGE = "Invalid phone number"
    INTERNAL_ERROR_MESSAGE = "Internal server error"
