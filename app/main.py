# app/main.py

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger
import sys

from app.core.database import test_connection, init_db
from app.core.config import settings
from app.core.rate_limiter import limiter
from app.core.responses import present, register_exception_handlers
from app.core.seeding_logic import seed_all

# Routers
from app.api.endpoints import (
    admin as admin_router,
    auth as auth_router,
    contact as contact_router,
    department as department_router,
    events as events_router,
    media as media_router,
    posts as posts_router,
    registrations as registrations_router,
    sponsorships as sponsorships_router,
)

# ------------------------------------------------------------
# LOGURU CONFIGURATION
# ------------------------------------------------------------
logger.remove()
logger.add(
    sys.stdout,
    level="DEBUG" if settings.DEBUG else "INFO",
    format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
           "<level>{level}</level> | "
           "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
           "<level>{message}</level>",
    colorize=True,
    backtrace=True,
    diagnose=settings.DEBUG,
)

# ------------------------------------------------------------
# FASTAPI APP INIT
# ------------------------------------------------------------
app = FastAPI(
    title="Club Portal Backend",
    version="1.0.0",
    description="Events, media, intake forms and dashboards for the club portal.",
)

app.state.limiter = limiter
register_exception_handlers(app)

# ------------------------------------------------------------
# CORS CONFIGURATION
# ------------------------------------------------------------
app.add_middleware(
    CORSMiddleware,
    allow_origins=list({*settings.CORS_ORIGINS, settings.FRONTEND_URL}),
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["Authorization", "Content-Type", "X-Turnstile-Token"],
)

# ------------------------------------------------------------
# REGISTER ROUTERS
# ------------------------------------------------------------
app.include_router(auth_router.router)
app.include_router(department_router.router)
app.include_router(events_router.router)
app.include_router(media_router.router)
app.include_router(registrations_router.router)
app.include_router(sponsorships_router.router)
app.include_router(contact_router.router)
app.include_router(posts_router.router)
app.include_router(admin_router.router)


# ------------------------------------------------------------
# APPLICATION STARTUP EVENTS
# ------------------------------------------------------------
@app.on_event("startup")
async def on_startup():
    logger.info("Starting Club Portal Backend...")

    try:
        await test_connection()
        logger.success("Database connection established.")
    except Exception:
        # Requests will answer 503 until the database is back
        logger.exception("Database connection failed; continuing without seeding.")
        return

    await init_db()
    logger.success("Database tables ready.")

    await seed_all()
    logger.success("Backend startup completed successfully.")


# ------------------------------------------------------------
# ROOT HEALTH CHECK
# ------------------------------------------------------------
@app.get("/", tags=["System"])
async def root():
    return present(
        {
            "status": "ok",
            "service": "Club Portal Backend",
            "version": app.version,
        },
        message="Backend running successfully",
    )
