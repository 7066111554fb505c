import os
import uuid
from datetime import date
from types import SimpleNamespace

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

# ------------------------------------------------------------------
# TEST SETTINGS
# Must be set BEFORE importing app.main: settings are read at import.
# ------------------------------------------------------------------
os.environ["SECRET_KEY"] = "test-secret-key-for-the-suite"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["TURNSTILE_SECRET_KEY"] = ""
os.environ["SUPABASE_URL"] = ""
os.environ["SUPABASE_KEY"] = ""
os.environ["SUPER_ADMIN_EMAIL"] = ""
os.environ["SUPER_ADMIN_PASSWORD"] = ""

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402
from sqlmodel import SQLModel  # noqa: E402

from app.main import app  # noqa: E402
from app.api.deps import get_db_session  # noqa: E402
from app.core.security import create_access_token  # noqa: E402
from app.core.seeding_logic import seed_departments  # noqa: E402
from app.models.enums import MediaType, UserRole  # noqa: E402
from app.models.event import Event  # noqa: E402
from app.models.media import Media  # noqa: E402
from app.services.auth_service import create_user  # noqa: E402
from app.services.department_service import grant_department_admin  # noqa: E402


# ------------------------------------------------------------------
# DATABASE (fresh in-memory SQLite per test)
# ------------------------------------------------------------------
@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(engine):
    return async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def session(session_factory):
    async with session_factory() as s:
        await seed_departments(s)
        await s.commit()
        yield s


@pytest_asyncio.fixture
async def client(session_factory, session):
    async def override_db_session():
        async with session_factory() as s:
            yield s

    app.dependency_overrides[get_db_session] = override_db_session
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver") as ac:
        yield ac
    app.dependency_overrides.clear()


# ------------------------------------------------------------------
# PRINCIPALS
# ------------------------------------------------------------------
def bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


@pytest_asyncio.fixture
async def make_user(session):
    async def _make(role=UserRole.user, departments=(), email=None, password="password123"):
        user = await create_user(
            session,
            email=email or f"{uuid.uuid4().hex[:10]}@example.com",
            password=password,
            full_name="Test Person",
            role=role,
        )
        for department_id in departments:
            await grant_department_admin(session, user.id, department_id)

        token = create_access_token(subject=str(user.id), data={"email": user.email})
        return SimpleNamespace(user=user, token=token, headers=bearer(token), password=password)

    return _make


@pytest_asyncio.fixture
async def admin(make_user):
    return await make_user(role=UserRole.admin)


@pytest_asyncio.fixture
async def education_admin(make_user):
    return await make_user(role=UserRole.department_admin, departments=["education"])


@pytest_asyncio.fixture
async def member(make_user):
    return await make_user()


# ------------------------------------------------------------------
# CONTENT
# ------------------------------------------------------------------
@pytest_asyncio.fixture
async def make_event(session):
    async def _make(department_id="education", is_public=True, title="Beach clean-up", **fields):
        event = Event(
            title=title,
            date=fields.pop("date", date(2026, 11, 20)),
            department_id=department_id,
            is_public=is_public,
            **fields,
        )
        session.add(event)
        await session.commit()
        await session.refresh(event)
        return event

    return _make


@pytest_asyncio.fixture
async def make_media(session):
    async def _make(department_id="education", is_public=True, media_type=MediaType.photo, **fields):
        media = Media(
            title=fields.pop("title", "Gallery photo"),
            media_type=media_type,
            media_url=fields.pop("media_url", "https://cdn.example.com/photo.jpg"),
            department_id=department_id,
            is_public=is_public,
            **fields,
        )
        session.add(media)
        await session.commit()
        await session.refresh(media)
        return media

    return _make


@pytest.fixture
def registration_payload():
    return {
        "full_name": "Riya Sharma",
        "email": "riya@example.com",
        "phone": "9876543210",
        "age": 21,
        "city": "Noida",
        "talent_category": "Dance",
        "experience": "Intermediate",
        "motivation": "I want to help run the cultural festival.",
        "emergency_contact": "Meera Sharma",
        "emergency_phone": "9876500000",
    }
