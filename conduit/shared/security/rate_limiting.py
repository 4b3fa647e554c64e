"""
Rate limiting configuration and setup.

Uses slowapi. Requests that present a session token are counted per
token, anonymous requests per client address. Sign-up and sign-in
carry a stricter limit than the default.
"""

import hashlib

from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address
from starlette.requests import Request
from starlette.responses import JSONResponse

from conduit.core.config import settings


def caller_or_remote_address(request: Request) -> str:
    """Return the rate limit bucket for a request.

    Keys on a digest of the presented token, never the token itself.
    """
    authorization = request.headers.get("authorization", "")
    _, _, token = authorization.partition(" ")
    if token.strip():
        return "token:" + hashlib.sha256(token.strip().encode()).hexdigest()[:32]
    return "addr:" + get_remote_address(request)


limiter = Limiter(
    key_func=caller_or_remote_address,
    default_limits=[settings.rate_limit_default],
)


async def rate_limit_exceeded_handler(
    _request: Request, exc: RateLimitExceeded
) -> JSONResponse:
    """Answer 429 in the standard error envelope.

    Args:
        _request: The incoming HTTP request.
        exc: The rate limit exceeded exception.
    """
    return JSONResponse(
        status_code=429,
        content={"errors": {"body": [f"Rate limit exceeded: {exc.detail}"]}},
    )
