"""Configuration settings for the contact mailer API.

This module manages environment variables and application settings.
"""
import os
from dotenv import load_dotenv

load_dotenv()


def _split_csv(value: str) -> list:
    return [item.strip() for item in value.split(",") if item.strip()]


class Settings:
    """Application settings.

    Attributes:
        PROJECT_NAME: Name of the project
        DEBUG: Debug mode flag
        LOG_LEVEL: Root log level name
        PORT: Port the uvicorn server binds to
        ALLOWED_ORIGINS: Origins accepted by the CORS middleware
        EMAIL_SERVICE: Well-known SMTP provider name (e.g. gmail)
        EMAIL_USER: Authenticating SMTP user, also used as the sender address
        EMAIL_PASS: Authenticating SMTP credential
        RECEIVER_EMAIL: Mailbox that receives contact submissions
    """
    def __init__(self):
        self.PROJECT_NAME = "Contact Mailer API"
        self.DEBUG = os.getenv("DEBUG", "False").lower() == "true"
        self.LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
        self.PORT = int(os.getenv("PORT", 3001))

        # CORS Settings
        self.ALLOWED_ORIGINS = _split_csv(
            os.getenv(
                "ALLOWED_ORIGINS",
                "http://localhost:3030,https://sathiplanners.com",
            )
        )

        # Email Settings
        self.EMAIL_SERVICE = os.getenv("EMAIL_SERVICE", "gmail")
        self.EMAIL_USER = os.getenv("EMAIL_USER")
        self.EMAIL_PASS = os.getenv("EMAIL_PASS")
        self.RECEIVER_EMAIL = os.getenv("RECEIVER_EMAIL")
        self.EMAIL_SENDER_NAME = os.getenv("EMAIL_SENDER_NAME", "Website Contact")
        self.CONTACT_SUBJECT = os.getenv("CONTACT_SUBJECT", "New Contact Submission")

        # SMTP overrides, take precedence over the EMAIL_SERVICE lookup
        self.SMTP_HOST = os.getenv("SMTP_HOST")
        smtp_port = os.getenv("SMTP_PORT")
        self.SMTP_PORT = int(smtp_port) if smtp_port else None
        smtp_secure = os.getenv("SMTP_SECURE")
        self.SMTP_SECURE = smtp_secure.lower() == "true" if smtp_secure else None
        self.SMTP_TIMEOUT = float(os.getenv("SMTP_TIMEOUT", 30))

        # Rate Limiting, per client IP
        self.RATE_LIMIT_MAX_REQUESTS = int(os.getenv("RATE_LIMIT_MAX_REQUESTS", 50))
        self.RATE_LIMIT_WINDOW_SECONDS = int(os.getenv("RATE_LIMIT_WINDOW_SECONDS", 60))

        # Upload Settings
        self.MAX_ATTACHMENT_BYTES = int(
            os.getenv("MAX_ATTACHMENT_BYTES", 25 * 1024 * 1024)
        )


settings = Settings()
