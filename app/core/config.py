from typing import List

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite+aiosqlite:///./club_portal.db"
    DB_ECHO: bool = False

    SECRET_KEY: str
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60
    ACCESS_TOKEN_COOKIE: str = "access_token"

    SUPER_ADMIN_EMAIL: str | None = None
    SUPER_ADMIN_PASSWORD: str | None = None
    SUPER_ADMIN_NAME: str | None = "Super Admin"
    ENV: str = "dev"  # "dev" or "prod"
    DEBUG: bool = False

    # --- STORAGE (Supabase) ---
    SUPABASE_URL: str | None = None
    SUPABASE_KEY: str | None = None
    STORAGE_BUCKET: str = "event-media"
    MAX_UPLOAD_SIZE_MB: int = 50

    # --- ABUSE PROTECTION ---
    REDIS_URL: str | None = None
    RATE_LIMIT_ENABLED: bool = True
    INTAKE_RATE_LIMIT: str = "10/minute"
    SIGNIN_RATE_LIMIT: str = "20/minute"
    TURNSTILE_SECRET_KEY: str | None = None

    FRONTEND_URL: str = "http://localhost:5173"
    CORS_ORIGINS: List[str] = ["http://localhost:5173"]

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"

settings = Settings()
