# app/services/department_service.py

import uuid
from datetime import datetime
from typing import List

from loguru import logger
from sqlmodel import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.errors import NotFound, ValidationError
from app.models.department import Department, DepartmentAdminGrant
from app.models.enums import UserRole
from app.models.user import RoleAssignment


# ============================================================================
# READ (public reference data)
# ============================================================================
async def list_departments(session: AsyncSession) -> List[Department]:
    result = await session.execute(select(Department).order_by(Department.name.asc()))
    return result.scalars().all()


async def get_department(session: AsyncSession, department_id: str) -> Department:
    result = await session.execute(select(Department).where(Department.id == department_id))
    department = result.scalar_one_or_none()
    if not department:
        raise NotFound(f"department {department_id}")
    return department


async def get_departments_by_ids(session: AsyncSession, department_ids) -> List[Department]:
    ids = list(department_ids)
    if not ids:
        return []
    result = await session.execute(
        select(Department).where(Department.id.in_(ids)).order_by(Department.name.asc())
    )
    return result.scalars().all()


# ============================================================================
# OPERATOR PROVISIONING (not routed)
# ============================================================================
async def assign_role(session: AsyncSession, user_id: uuid.UUID, role: UserRole) -> RoleAssignment:
    result = await session.execute(select(RoleAssignment).where(RoleAssignment.user_id == user_id))
    assignment = result.scalar_one_or_none()

    if assignment:
        assignment.role = role
        assignment.updated_at = datetime.utcnow()
    else:
        assignment = RoleAssignment(user_id=user_id, role=role)

    session.add(assignment)
    await session.commit()
    await session.refresh(assignment)

    logger.info(f"Role of {user_id} set to {role.value}")
    return assignment


async def grant_department_admin(
    session: AsyncSession,
    user_id: uuid.UUID,
    department_id: str,
) -> DepartmentAdminGrant:
    """
    Activates (or creates) the grant and makes sure the principal holds the
    department_admin role. Admins keep their role.
    """
    await get_department(session, department_id)

    result = await session.execute(
        select(DepartmentAdminGrant).where(
            (DepartmentAdminGrant.user_id == user_id) &
            (DepartmentAdminGrant.department_id == department_id)
        )
    )
    grant = result.scalar_one_or_none()

    if grant:
        grant.is_active = True
    else:
        grant = DepartmentAdminGrant(user_id=user_id, department_id=department_id)
    session.add(grant)

    role_row = await session.execute(select(RoleAssignment).where(RoleAssignment.user_id == user_id))
    assignment = role_row.scalar_one_or_none()
    if assignment is None:
        session.add(RoleAssignment(user_id=user_id, role=UserRole.department_admin))
    elif assignment.role == UserRole.user:
        assignment.role = UserRole.department_admin
        assignment.updated_at = datetime.utcnow()
        session.add(assignment)

    await session.commit()
    await session.refresh(grant)

    logger.info(f"Granted {department_id} to department admin {user_id}")
    return grant


async def revoke_department_admin(session: AsyncSession, user_id: uuid.UUID, department_id: str) -> None:
    result = await session.execute(
        select(DepartmentAdminGrant).where(
            (DepartmentAdminGrant.user_id == user_id) &
            (DepartmentAdminGrant.department_id == department_id)
        )
    )
    grant = result.scalar_one_or_none()
    if not grant:
        raise ValidationError.for_field("department_id", "No such grant")

    grant.is_active = False
    session.add(grant)
    await session.commit()

    logger.info(f"Revoked {department_id} from department admin {user_id}")
