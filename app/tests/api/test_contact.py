import pytest
from app.core.config import settings
from app.tests.constants.contact import ContactTestConstants


@pytest.mark.asyncio
class TestContactEndpoint:
    async def test_submit_contact_form_success(self, client, mock_contact_send_mail):
        """A valid submission without a file is mailed once with no attachments."""
        response = client.post(
            "/contactus", data=ContactTestConstants.VALID_FORM.value
        )

        assert response.status_code == 200
        assert response.json() == {
            "message": ContactTestConstants.SUCCESS_MESSAGE.value
        }

        mock_contact_send_mail.assert_called_once()
        message = mock_contact_send_mail.call_args.args[0]
        assert message.attachments == []
        assert message.subject == "New Contact Submission"
        assert message.sender_name == "Website Contact"
        assert "Jane Doe" in message.html

    async def test_submit_contact_form_with_document(
        self, client, mock_contact_send_mail
    ):
        """An uploaded PDF is forwarded with its bytes, filename and content type."""
        response = client.post(
            "/contactus",
            data=ContactTestConstants.FULL_FORM.value,
            files={
                "documents": (
                    ContactTestConstants.PDF_FILENAME.value,
                    ContactTestConstants.PDF_CONTENT.value,
                    ContactTestConstants.PDF_CONTENT_TYPE.value,
                )
            },
        )

        assert response.status_code == 200

        mock_contact_send_mail.assert_called_once()
        message = mock_contact_send_mail.call_args.args[0]
        assert len(message.attachments) == 1
        attachment = message.attachments[0]
        assert attachment.content == ContactTestConstants.PDF_CONTENT.value
        assert attachment.filename == ContactTestConstants.PDF_FILENAME.value
        assert attachment.content_type == ContactTestConstants.PDF_CONTENT_TYPE.value
        assert attachment.size == len(ContactTestConstants.PDF_CONTENT.value)

    @pytest.mark.parametrize("missing_field", ["full_name", "phone", "email"])
    async def test_submit_contact_form_missing_required_field(
        self, client, mock_contact_send_mail, missing_field
    ):
        form = dict(ContactTestConstants.VALID_FORM.value)
        del form[missing_field]

        response = client.post("/contactus", data=form)

        assert response.status_code == 400
        assert response.json() == {
            "error": ContactTestConstants.MISSING_REQUIRED_MESSAGE.value
        }
        mock_contact_send_mail.assert_not_called()

    async def test_submit_contact_form_invalid_email(
        self, client, mock_contact_send_mail
    ):
        form = {**ContactTestConstants.VALID_FORM.value, "email": "jane@x"}

        response = client.post("/contactus", data=form)

        assert response.status_code == 400
        assert response.json() == {
            "error": ContactTestConstants.INVALID_EMAIL_MESSAGE.value
        }
        mock_contact_send_mail.assert_not_called()

    async def test_submit_contact_form_invalid_phone(
        self, client, mock_contact_send_mail
    ):
        form = {**ContactTestConstants.VALID_FORM.value, "phone": "98765-43210"}

        response = client.post("/contactus", data=form)

        assert response.status_code == 400
        assert response.json() == {
            "error": ContactTestConstants.INVALID_PHONE_MESSAGE.value
        }
        mock_contact_send_mail.assert_not_called()

    async def test_submit_contact_form_transport_failure(
        self, client, mock_contact_send_mail
    ):
        """Transport errors are reported as a generic 500 without the raw error text."""
        mock_contact_send_mail.side_effect = RuntimeError(
            "535 auth failed for website@sathiplanners.com"
        )

        response = client.post(
            "/contactus", data=ContactTestConstants.VALID_FORM.value
        )

        assert response.status_code == 500
        assert response.json() == {
            "error": ContactTestConstants.INTERNAL_ERROR_MESSAGE.value
        }
        assert "535" not in response.text

    async def test_submit_contact_form_disallowed_file_type(
        self, client, mock_contact_send_mail
    ):
        response = client.post(
            "/contactus",
            data=ContactTestConstants.VALID_FORM.value,
            files={"documents": ("payload.exe", b"MZ\x90\x00", "application/x-msdownload")},
        )

        assert response.status_code == 400
        assert response.json() == {"error": "File type not allowed"}
        mock_contact_send_mail.assert_not_called()

    async def test_submit_contact_form_file_too_large(
        self, client, mock_contact_send_mail, mocker
    ):
        mocker.patch.object(settings, "MAX_ATTACHMENT_BYTES", 16)

        response = client.post(
            "/contactus",
            data=ContactTestConstants.VALID_FORM.value,
            files={
                "documents": (
                    ContactTestConstants.PDF_FILENAME.value,
                    ContactTestConstants.PDF_CONTENT.value,
                    ContactTestConstants.PDF_CONTENT_TYPE.value,
                )
            },
        )

        assert response.status_code == 413
        assert response.json() == {"error": "File too large"}
        mock_contact_send_mail.assert_not_called()

    async def test_submit_contact_form_sets_security_headers(
        self, client, mock_contact_send_mail
    ):
        response = client.post(
            "/contactus", data=ContactTestConstants.VALID_FORM.value
        )

        assert response.headers["X-Content-Type-Options"] == "nosniff"
        assert response.headers["X-Frame-Options"] == "SAMEORIGIN"

    async def test_submit_contact_form_as_json(self, client, mock_contact_send_mail):
        """A JSON body goes through the same validation and mail path as a form."""
        response = client.post(
            "/contactus", json=ContactTestConstants.FULL_FORM.value
        )

        assert response.status_code == 200
        assert response.json() == {
            "message": ContactTestConstants.SUCCESS_MESSAGE.value
        }
        mock_contact_send_mail.assert_called_once()
        message = mock_contact_send_mail.call_args.args[0]
        assert message.attachments == []
        assert "Acme &amp; Sons" in message.html
        assert "Looking for guidance.<br/>Prefer evenings." in message.html

    async def test_submit_contact_form_as_json_with_numeric_phone(
        self, client, mock_contact_send_mail
    ):
        form = {**ContactTestConstants.VALID_FORM.value, "phone": 9876543210}

        response = client.post("/contactus", json=form)

        assert response.status_code == 200
        mock_contact_send_mail.assert_called_once()

    async def test_submit_contact_form_as_json_invalid_email(
        self, client, mock_contact_send_mail
    ):
        form = {**ContactTestConstants.VALID_FORM.value, "email": "jane@x"}

        response = client.post("/contactus", json=form)

        assert response.status_code == 400
        assert response.json() == {
            "error": ContactTestConstants.INVALID_EMAIL_MESSAGE.value
        }
        mock_contact_send_mail.assert_not_called()

    @pytest.mark.parametrize("body", [b"{not json", b"[1, 2, 3]"])
    async def test_submit_contact_form_malformed_json(
        self, client, mock_contact_send_mail, body
    ):
        response = client.post(
            "/contactus",
            content=body,
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert response.json() == {"error": "Invalid request"}
        mock_contact_send_mail.assert_not_called()

    async def test_submit_contact_form_reports_rate_limit_headers(
        self, client, mock_contact_send_mail
    ):
        response = client.post(
            "/contactus", data=ContactTestConstants.VALID_FORM.value
        )

        assert response.headers["RateLimit-Limit"] == str(settings.RATE_LIMIT_MAX_REQUESTS)
        assert response.headers["RateLimit-Remaining"] == str(
            settings.RATE_LIMIT_MAX_REQUESTS - 1
        )
        assert response.headers["RateLimit-Policy"] == (
            f"{settings.RATE_LIMIT_MAX_REQUESTS};w={settings.RATE_LIMIT_WINDOW_SECONDS}"
        )

    async def test_submit_contact_form_rate_limited(
        self, client, mock_contact_send_mail, mocker
    ):
        mocker.patch.object(settings, "RATE_LIMIT_MAX_REQUESTS", 2)

        for _ in range(2):
            response = client.post(
                "/contactus", data=ContactTestConstants.VALID_FORM.value
            )
            assert response.status_code == 200

        response = client.post(
            "/contactus", data=ContactTestConstants.VALID_FORM.value
        )

        assert response.status_code == 429
        assert response.json() == {
            "error": "Too many requests, please try again later."
        }
        assert response.headers["RateLimit-Remaining"] == "0"
        assert int(response.headers["Retry-After"]) >= 1
        assert mock_contact_send_mail.call_count == 2
