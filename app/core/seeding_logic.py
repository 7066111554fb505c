from sqlmodel import select
from sqlalchemy.exc import SQLAlchemyError
from loguru import logger
from app.models.department import Department
from app.models.enums import UserRole
from app.services.auth_service import get_user_by_email, create_user
from app.services.department_service import assign_role
from app.core.database import AsyncSessionLocal
from app.core.config import settings

# ----------------------------------------------------------------
# 1. STATIC DATA
# ----------------------------------------------------------------

DEPARTMENTS_DATA = [
    {
        "id": "health-hygiene-wellbeing",
        "name": "Health Hygiene And Well-Being",
        "description": "Health awareness and wellness programs",
        "icon": "🏥",
    },
    {
        "id": "gender-equality",
        "name": "Gender Equality (GE)",
        "description": "Promoting gender equality and women empowerment",
        "icon": "⚖️",
    },
    {
        "id": "environmental",
        "name": "Environmental",
        "description": "Environmental conservation and sustainability programs",
        "icon": "🌱",
    },
    {
        "id": "social-responsibility",
        "name": "Social Responsibility (SR)",
        "description": "Community service and social impact initiatives",
        "icon": "🤝",
    },
    {
        "id": "sustainable-rural-development",
        "name": "Sustainable Rural Development (SRD)",
        "description": "Rural development and agricultural sustainability",
        "icon": "🌾",
    },
    {
        "id": "education",
        "name": "Education",
        "description": "Educational programs and literacy initiatives",
        "icon": "📚",
    },
]


# ----------------------------------------------------------------
# 2. SEEDING FUNCTIONS
# ----------------------------------------------------------------

async def seed_all():
    """Runs every seeding step; safe to call on each startup."""
    async with AsyncSessionLocal() as session:
        try:
            await seed_departments(session)
            await session.commit()
            await seed_admin_user(session)
            logger.success("Seeding complete.")
        except SQLAlchemyError as e:
            logger.error(f"Seeding failed: {e}")
            await session.rollback()


async def seed_departments(session):
    for d in DEPARTMENTS_DATA:
        result = await session.execute(select(Department).where(Department.id == d["id"]))
        dept_obj = result.scalar_one_or_none()

        if not dept_obj:
            logger.info(f"Creating department: {d['name']}")
            session.add(Department(**d))
        elif (dept_obj.name, dept_obj.description, dept_obj.icon) != (d["name"], d["description"], d["icon"]):
            logger.warning(f"Refreshing department {d['id']}")
            dept_obj.name = d["name"]
            dept_obj.description = d["description"]
            dept_obj.icon = d["icon"]
            session.add(dept_obj)
    await session.flush()


async def seed_admin_user(session):
    if not settings.SUPER_ADMIN_EMAIL or not settings.SUPER_ADMIN_PASSWORD:
        logger.warning("Missing Super Admin credentials in settings.")
        return

    existing = await get_user_by_email(session, settings.SUPER_ADMIN_EMAIL)
    if existing:
        # The configured account is always an admin
        await assign_role(session, existing.id, UserRole.admin)
        logger.info("Super Admin already exists. Skipping.")
        return

    await create_user(
        session=session,
        email=settings.SUPER_ADMIN_EMAIL,
        password=settings.SUPER_ADMIN_PASSWORD,
        full_name=settings.SUPER_ADMIN_NAME or "Super Admin",
        role=UserRole.admin,
    )
    logger.success("Super Admin created successfully.")
