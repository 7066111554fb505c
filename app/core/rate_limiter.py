# app/core/rate_limiter.py

from slowapi import Limiter
from slowapi.util import get_remote_address
from loguru import logger

from app.core.config import settings


# ----------------------------------------------------------------
# 1. CLIENT IP (behind proxies)
# ----------------------------------------------------------------
def get_real_ip(request):
    """
    Leftmost X-Forwarded-For entry, then X-Real-IP, then the socket peer.
    """
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        return forwarded.split(",")[0].strip()

    real_ip = request.headers.get("X-Real-IP")
    if real_ip:
        return real_ip

    return get_remote_address(request)


# ----------------------------------------------------------------
# 2. STORAGE URI (managed Redis usually needs TLS)
# ----------------------------------------------------------------
def _storage_uri() -> str | None:
    uri = settings.REDIS_URL
    if uri and uri.startswith("redis://") and settings.ENV == "prod":
        uri = uri.replace("redis://", "rediss://", 1)
    return uri


# ----------------------------------------------------------------
# 3. LIMITER
# ----------------------------------------------------------------
def build_limiter() -> Limiter:
    storage_uri = _storage_uri()

    if not settings.RATE_LIMIT_ENABLED:
        logger.info("Rate limiting disabled by configuration")
        return Limiter(key_func=get_real_ip, enabled=False)

    if storage_uri:
        logger.info("Initializing rate limiter with Redis storage")
        return Limiter(
            key_func=get_real_ip,
            storage_uri=storage_uri,
            strategy="fixed-window",
            storage_options={"socket_connect_timeout": 5, "retry_on_timeout": True},
        )

    logger.warning("REDIS_URL not set, rate limiting in memory")
    return Limiter(key_func=get_real_ip)


limiter = build_limiter()
