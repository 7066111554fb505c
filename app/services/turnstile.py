# app/services/turnstile.py
import httpx
from fastapi import Request
from loguru import logger

from app.core.config import settings
from app.core.errors import ValidationError

VERIFY_URL = "https://challenges.cloudflare.com/turnstile/v0/siteverify"
TOKEN_HEADER = "X-Turnstile-Token"


async def verify_turnstile(token: str, ip: str | None = None) -> bool:
    """
    Verifies the Turnstile token with Cloudflare's API.
    """
    # Development bypass token
    if settings.DEBUG and token == "development-token-bypass":
        return True

    payload = {
        "secret": settings.TURNSTILE_SECRET_KEY,
        "response": token,
        "remoteip": ip,
    }

    async with httpx.AsyncClient(timeout=10) as client:
        try:
            response = await client.post(VERIFY_URL, data=payload)
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPError as e:
            logger.error(f"Turnstile connection error: {e}")
            return False

    if data.get("success"):
        return True

    logger.info(f"Turnstile rejected token: {data.get('error-codes', [])}")
    return False


async def require_human(request: Request) -> None:
    """
    Dependency for the public intake forms. A no-op until a secret
    key is configured.
    """
    if not settings.TURNSTILE_SECRET_KEY:
        return

    token = request.headers.get(TOKEN_HEADER)
    if not token:
        raise ValidationError.for_field("turnstile", "Verification token missing")

    ip = request.client.host if request.client else None
    if not await verify_turnstile(token, ip):
        raise ValidationError.for_field("turnstile", "Verification failed, please retry")
