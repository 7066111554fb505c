# app/core/rbac.py

import uuid
from dataclasses import dataclass, field
from typing import AbstractSet, Iterable, Optional, Union

from fastapi import Depends, Request
from loguru import logger
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from app.api.deps import get_caller, get_db_session
from app.core.constants import ALL_DEPARTMENTS, ANY_ROLE, _AllDepartments
from app.core.errors import AuthorizationBackendUnavailable, DENIAL_ERRORS, DenyReason
from app.core.session import ANONYMOUS, Caller
from app.models.department import DepartmentAdminGrant
from app.models.enums import UserRole
from app.models.user import RoleAssignment

DepartmentScope = Union[AbstractSet[str], _AllDepartments]


@dataclass(frozen=True)
class AuthorizationContext:
    principal: Caller
    role: Optional[UserRole]
    department_ids: DepartmentScope = field(default_factory=frozenset)

    @property
    def is_anonymous(self) -> bool:
        return not self.principal.is_authenticated

    @property
    def effective_role(self) -> Optional[UserRole]:
        # A department admin without an active grant can do nothing a user can't
        if self.role == UserRole.department_admin and not self.department_ids:
            return UserRole.user
        return self.role

    @property
    def is_admin(self) -> bool:
        return self.effective_role == UserRole.admin

    @property
    def is_department_admin(self) -> bool:
        return self.effective_role == UserRole.department_admin

    @property
    def principal_id(self) -> Optional[uuid.UUID]:
        return self.principal.id

    def can_access_department(self, department_id: Optional[str]) -> bool:
        if self.is_admin:
            return True
        if department_id is None or not self.is_department_admin:
            return False
        return department_id in self.department_ids


ANONYMOUS_CONTEXT = AuthorizationContext(principal=ANONYMOUS, role=None)


@dataclass(frozen=True)
class Decision:
    allowed: bool
    reason: Optional[DenyReason] = None
    context: Optional[AuthorizationContext] = None

    @classmethod
    def allow(cls, context: AuthorizationContext) -> "Decision":
        return cls(allowed=True, context=context)

    @classmethod
    def deny(cls, reason: DenyReason, context: Optional[AuthorizationContext] = None) -> "Decision":
        return cls(allowed=False, reason=reason, context=context)


# ------------------------------------------------------------
# ROLE / DEPARTMENT LOOKUP
# ------------------------------------------------------------
async def lookup_authorization(session: AsyncSession, principal: Caller) -> AuthorizationContext:
    if not principal.is_authenticated:
        return ANONYMOUS_CONTEXT

    try:
        result = await session.execute(
            select(RoleAssignment.role).where(RoleAssignment.user_id == principal.id)
        )
        role = result.scalar_one_or_none() or UserRole.user

        if role == UserRole.admin:
            return AuthorizationContext(principal, role, ALL_DEPARTMENTS)

        if role == UserRole.department_admin:
            grants = await session.execute(
                select(DepartmentAdminGrant.department_id).where(
                    (DepartmentAdminGrant.user_id == principal.id) &
                    (DepartmentAdminGrant.is_active == True)  # noqa: E712
                )
            )
            return AuthorizationContext(principal, role, frozenset(grants.scalars().all()))

    except SQLAlchemyError as e:
        logger.error(f"Role lookup failed for {principal.id}: {e}")
        raise AuthorizationBackendUnavailable("role store unreachable") from e

    return AuthorizationContext(principal, UserRole(role), frozenset())


# ------------------------------------------------------------
# AUTHORIZATION GATE
# ------------------------------------------------------------
def evaluate(
    context: AuthorizationContext,
    required_roles: Iterable[UserRole],
    resource_department_id: Optional[str] = None,
    public: bool = False,
) -> Decision:
    """
    Decide on an already looked-up context.

    The role check runs before the department check, so a caller with the
    wrong role never learns anything about a department id.
    """
    if context.is_anonymous:
        if public:
            return Decision.allow(context)
        return Decision.deny(DenyReason.Unauthenticated, context)

    if context.effective_role not in set(required_roles):
        return Decision.deny(DenyReason.InsufficientRole, context)

    if resource_department_id is not None and not context.is_admin:
        if resource_department_id not in context.department_ids:
            return Decision.deny(DenyReason.OutOfScope, context)

    return Decision.allow(context)


async def authorize(
    session: AsyncSession,
    principal: Caller,
    required_roles: Iterable[UserRole],
    resource_department_id: Optional[str] = None,
    public: bool = False,
) -> Decision:
    if not principal.is_authenticated:
        return evaluate(ANONYMOUS_CONTEXT, required_roles, resource_department_id, public)

    context = await lookup_authorization(session, principal)
    return evaluate(context, required_roles, resource_department_id, public)


def enforce(decision: Decision, where: str = "") -> AuthorizationContext:
    if decision.allowed:
        return decision.context

    principal_id = decision.context.principal_id if decision.context else None
    raise DENIAL_ERRORS[decision.reason](f"principal={principal_id} at={where}")


# ------------------------------------------------------------
# ROUTE DEPENDENCY
# ------------------------------------------------------------
def AllowRoles(*allowed_roles: UserRole, public: bool = False):
    """
    Session → role lookup → gate, as a FastAPI dependency.

    Public routes accept every role and anonymous callers; the returned
    context still scopes what they can see.
    """
    required = frozenset(allowed_roles) if allowed_roles else ANY_ROLE

    async def role_checker(
        request: Request,
        principal: Caller = Depends(get_caller),
        session: AsyncSession = Depends(get_db_session),
    ) -> AuthorizationContext:
        decision = await authorize(session, principal, required, public=public)
        return enforce(decision, where=f"{request.method} {request.url.path}")

    return role_checker


public_access = AllowRoles(public=True)
authenticated = AllowRoles()
