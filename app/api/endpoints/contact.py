"""Contact form endpoints for the contact mailer API.

This module contains the FastAPI route receiving "contact us" submissions
from the website, with an optional document upload.
"""

import logging
from fastapi import APIRouter, Depends, File, Form, Request, UploadFile, status
from fastapi.responses import JSONResponse
from typing import Dict, Optional

from app.core.rate_limiter import check_contact_rate_limit
from app.models.contact import ContactFormRequest, ContactFormResponse, ErrorResponse
from app.services.contact_service import ContactService, contact_service
from app.utils.file_upload import read_upload

logger = logging.getLogger(__name__)

router = APIRouter()


def get_contact_service() -> ContactService:
    """Return the contact service shared by every request."""
    return contact_service


def is_json_request(request: Request) -> bool:
    content_type = request.headers.get("content-type", "")
    return content_type.split(";")[0].strip().lower() == "application/json"


@router.post(
    "/contactus",
    response_model=ContactFormResponse,
    status_code=status.HTTP_200_OK,
    summary="Submit contact form",
    description="Submit the website contact form, as a form with an optional document or as JSON. No authentication required.",
    responses={
        status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
        status.HTTP_413_CONTENT_TOO_LARGE: {"model": ErrorResponse},
        status.HTTP_429_TOO_MANY_REQUESTS: {"model": ErrorResponse},
        status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorResponse},
    },
)
async def submit_contact_form(
    request: Request,
    full_name: Optional[str] = Form(None),
    phone: Optional[str] = Form(None),
    email: Optional[str] = Form(None),
    what_describes_you_best: Optional[str] = Form(None),
    YOE: Optional[str] = Form(None),
    highest_qualification: Optional[str] = Form(None),
    current_org: Optional[str] = Form(None),
    location: Optional[str] = Form(None),
    inquiry_details: Optional[str] = Form(None),
    documents: Optional[UploadFile] = File(None),
    rate_limit_headers: Dict[str, str] = Depends(check_contact_rate_limit),
    service: ContactService = Depends(get_contact_service),
) -> JSONResponse:
    """
    Submit a contact form message to the site owner.

    This endpoint:
    - Accepts multipart, urlencoded or JSON submissions
    - Limits each client IP to a fixed number of requests per window
    - Rejects disallowed or oversized documents before anything else runs
    - Validates the required fields and their format
    - Emails the rendered submission, with the document attached if present

    Returns:
        JSON with `message` on success or `error` on failure
    """
    if is_json_request(request):
        try:
            payload = ContactFormRequest.model_validate(await request.json())
        except ValueError:
            logger.info("Rejected contact submission with malformed JSON body")
            return JSONResponse(
                status_code=status.HTTP_400_BAD_REQUEST,
                content={"error": "Invalid request"},
                headers=rate_limit_headers,
            )
        attachment = None
    else:
        payload = ContactFormRequest(
            full_name=full_name,
            phone=phone,
            email=email,
            what_describes_you_best=what_describes_you_best,
            YOE=YOE,
            highest_qualification=highest_qualification,
            current_org=current_org,
            location=location,
            inquiry_details=inquiry_details,
        )
        attachment = await read_upload(documents)

    outcome = await service.handle(payload.model_dump(), attachment)

    return JSONResponse(
        status_code=outcome.status_code,
        content=outcome.body(),
        headers=rate_limit_headers,
    )
