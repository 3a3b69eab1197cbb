"""Per-IP rate limiting for the contact form.

A sliding window of RATE_LIMIT_WINDOW_SECONDS with at most
RATE_LIMIT_MAX_REQUESTS requests per client IP. State lives in process
memory, so each worker keeps its own window.
"""

import logging
import math
import threading
import time
from collections import defaultdict, deque
from typing import Deque, Dict

from fastapi import Request

from app.core.config import settings

logger = logging.getLogger(__name__)

RATE_LIMIT_MESSAGE = "Too many requests, please try again later."

_contact_windows: Dict[str, Deque[float]] = defaultdict(deque)
_contact_lock = threading.Lock()


class RateLimitExceededError(Exception):
    """Raised when a client has used up its request window."""

    def __init__(self, message: str, headers: Dict[str, str]):
        super().__init__(message)
        self.message = message
        self.headers = headers


def get_client_ip(request: Request) -> str:
    return request.client.host if request.client else "unknown"


def _rate_limit_headers(limit: int, window: int, remaining: int, reset: int) -> Dict[str, str]:
    return {
        "RateLimit-Policy": f"{limit};w={window}",
        "RateLimit-Limit": str(limit),
        "RateLimit-Remaining": str(remaining),
        "RateLimit-Reset": str(reset),
    }


async def check_contact_rate_limit(request: Request) -> Dict[str, str]:
    """
    Count a request against the client's window.

    Returns:
        RateLimit-* headers describing the client's remaining quota

    Raises:
        RateLimitExceededError: If the client already used every request of the window
    """
    limit = settings.RATE_LIMIT_MAX_REQUESTS
    window = settings.RATE_LIMIT_WINDOW_SECONDS
    client_ip = get_client_ip(request)
    now = time.monotonic()
    window_start = now - window

    with _contact_lock:
        ip_window = _contact_windows[client_ip]

        while ip_window and ip_window[0] <= window_start:
            ip_window.popleft()

        if len(ip_window) >= limit:
            reset = max(1, math.ceil(ip_window[0] + window - now))
            headers = _rate_limit_headers(limit, window, 0, reset)
            headers["Retry-After"] = str(reset)
            logger.warning(f"Rate limit exceeded for {client_ip} on {request.url.path}")
            raise RateLimitExceededError(RATE_LIMIT_MESSAGE, headers)

        ip_window.append(now)
        remaining = limit - len(ip_window)
        reset = max(1, math.ceil(ip_window[0] + window - now))

    return _rate_limit_headers(limit, window, remaining, reset)


def reset_rate_limiter_state() -> None:
    """Forget every client window."""
    with _contact_lock:
        _contact_windows.clear()
