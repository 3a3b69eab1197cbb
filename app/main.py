from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
import uvicorn
import os

from app.api.endpoints import contact
from app.core.config import settings
from app.core.logging import setup_logging
from app.core.rate_limiter import RateLimitExceededError
from app.utils.file_upload import AttachmentRejectedError
from app.utils.security_headers import SecurityHeadersMiddleware
import logging
import json

setup_logging()

logger = logging.getLogger(__name__)

with open(os.path.join(os.path.dirname(__file__), "log_config.json"), "r") as file:
    LOGGING_CONFIG = json.load(file)


app = FastAPI(
    title=settings.PROJECT_NAME,
    description="Receives the website contact form and forwards it by email",
    version="0.1.0",
    debug=settings.DEBUG,
)

app.add_middleware(SecurityHeadersMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=False,
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)

app.include_router(contact.router, tags=["contact"])


@app.get("/", tags=["status"])
async def root():
    return "Hello, API is working !!"


@app.get("/health", tags=["status"])
async def health():
    return {"status": "healthy"}


@app.exception_handler(AttachmentRejectedError)
async def attachment_rejected_handler(request: Request, exc: AttachmentRejectedError):
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(RateLimitExceededError)
async def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceededError):
    return JSONResponse(
        status_code=429,
        content={"error": exc.message},
        headers=exc.headers,
    )


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    logger.info(f"Malformed request to {request.url.path}: {exc.errors()}")
    return JSONResponse(status_code=400, content={"error": "Invalid request"})


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.url.path}")
    return JSONResponse(
        status_code=500,
        content={"error": "Internal server error"},
    )


if __name__ == "__main__":
    uvicorn.run(
        "app.main:app",
        host="0.0.0.0",
        port=settings.PORT,
        reload=settings.DEBUG,
        log_config=LOGGING_CONFIG,
    )
