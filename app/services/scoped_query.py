# app/services/scoped_query.py
"""
Row scoping for every owned entity.

Callers never build their own WHERE clause for authorization: reads go
through `list_owned` / `get_owned` / `count_owned`, writes through
`mutate_owned`, and all of them AND the caller's scope predicate into the
statement. Updates and deletes load the target through the same predicate
before touching it, so a hidden row and a missing row are the same NotFound.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, AsyncIterator, Dict, FrozenSet, List, Mapping, Optional, Tuple, Type
import uuid

from loguru import logger
from sqlalchemy import false, func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import SQLModel, select

from app.core.errors import InsufficientRole, NotFound, ScopeMismatch, ValidationError
from app.core.rbac import AuthorizationContext
from app.models.contact import ContactMessage
from app.models.department import Department
from app.models.enums import (
    ContactStatus,
    EventStatus,
    MediaType,
    PostType,
    RegistrationStatus,
    SponsorshipStatus,
    UserRole,
)
from app.models.event import Event
from app.models.media import Media
from app.models.post import Post
from app.models.registration import Registration
from app.models.sponsorship import SponsorshipInquiry


@dataclass(frozen=True)
class EntityPolicy:
    name: str
    model: Type[SQLModel]
    write_roles: FrozenSet[UserRole]
    department_scoped: bool = False
    public_visibility: bool = False
    # Anyone, anonymous included, may create rows (public forms)
    intake: bool = False
    owner_field: Optional[str] = None
    enum_fields: Mapping[str, Type[Enum]] = field(default_factory=dict)
    exact_filters: Tuple[str, ...] = ()
    bool_filters: Tuple[str, ...] = ()
    # field -> entity name whose row must be visible to the caller
    references: Mapping[str, str] = field(default_factory=dict)
    order_by: Tuple[str, ...] = ("created_at",)

    @property
    def protected_fields(self) -> FrozenSet[str]:
        fields = {"id", "created_at", "updated_at"}
        if self.owner_field:
            fields.add(self.owner_field)
        return frozenset(fields)

    def column(self, name: str):
        return getattr(self.model, name)


_MANAGERS = frozenset({UserRole.admin, UserRole.department_admin})
_ADMINS = frozenset({UserRole.admin})

EVENTS = EntityPolicy(
    name="events",
    model=Event,
    write_roles=_MANAGERS,
    department_scoped=True,
    public_visibility=True,
    owner_field="created_by",
    enum_fields={"status": EventStatus},
    exact_filters=("department_id",),
    order_by=("-date",),
)

MEDIA = EntityPolicy(
    name="media",
    model=Media,
    write_roles=_MANAGERS,
    department_scoped=True,
    public_visibility=True,
    owner_field="uploaded_by",
    enum_fields={"media_type": MediaType},
    exact_filters=("department_id", "event_id"),
    bool_filters=("is_featured",),
    references={"event_id": "events"},
    order_by=("-created_at",),
)

REGISTRATIONS = EntityPolicy(
    name="registrations",
    model=Registration,
    write_roles=_ADMINS,
    intake=True,
    enum_fields={"status": RegistrationStatus},
    order_by=("-created_at",),
)

SPONSORSHIPS = EntityPolicy(
    name="sponsorships",
    model=SponsorshipInquiry,
    write_roles=_ADMINS,
    intake=True,
    enum_fields={"status": SponsorshipStatus},
    order_by=("-created_at",),
)

CONTACT_MESSAGES = EntityPolicy(
    name="contact_messages",
    model=ContactMessage,
    write_roles=_ADMINS,
    intake=True,
    enum_fields={"status": ContactStatus},
    order_by=("-created_at",),
)

POSTS = EntityPolicy(
    name="posts",
    model=Post,
    write_roles=_ADMINS,
    public_visibility=True,
    owner_field="created_by",
    enum_fields={"post_type": PostType},
    order_by=("-created_at",),
)

POLICIES: Dict[str, EntityPolicy] = {
    p.name: p for p in (EVENTS, MEDIA, REGISTRATIONS, SPONSORSHIPS, CONTACT_MESSAGES, POSTS)
}


# ------------------------------------------------------------
# SCOPE PREDICATE
# ------------------------------------------------------------
def scope_predicate(ctx: AuthorizationContext, policy: EntityPolicy):
    """None means unrestricted (admin)."""
    if ctx.is_admin:
        return None

    if ctx.is_department_admin and policy.department_scoped:
        return policy.column("department_id").in_(sorted(ctx.department_ids))

    if policy.public_visibility:
        return policy.column("is_public") == True  # noqa: E712

    # No public view of this entity (registrations, inquiries, messages)
    return false()


def _ordering(policy: EntityPolicy):
    for name in policy.order_by:
        if name.startswith("-"):
            yield policy.column(name[1:]).desc()
        else:
            yield policy.column(name).asc()


def _apply_filters(statement, policy: EntityPolicy, filters: Optional[Mapping[str, Any]]):
    for key, value in (filters or {}).items():
        if value is None or value == "":
            continue

        if key in policy.enum_fields:
            enum_cls = policy.enum_fields[key]
            try:
                value = enum_cls(value)
            except ValueError:
                # Unknown enumerated values mean "no filter"
                logger.debug(f"Ignoring unrecognised {policy.name}.{key} filter {value!r}")
                continue
            statement = statement.where(policy.column(key) == value)

        elif key in policy.exact_filters:
            statement = statement.where(policy.column(key) == value)

        elif key in policy.bool_filters:
            statement = statement.where(policy.column(key) == bool(value))

    return statement


def scoped_select(ctx: AuthorizationContext, policy: EntityPolicy, filters: Optional[Mapping[str, Any]] = None):
    statement = select(policy.model)

    predicate = scope_predicate(ctx, policy)
    if predicate is not None:
        statement = statement.where(predicate)

    statement = _apply_filters(statement, policy, filters)
    return statement.order_by(*_ordering(policy))


class ScopedRows:
    """
    Lazy result of a scoped read. Nothing runs until it is iterated, and
    every iteration re-executes the statement.
    """

    def __init__(self, session: AsyncSession, statement):
        self._session = session
        self.statement = statement

    def __aiter__(self) -> AsyncIterator[SQLModel]:
        return self._iterate()

    async def _iterate(self) -> AsyncIterator[SQLModel]:
        result = await self._session.execute(self.statement)
        for row in result.scalars():
            yield row

    async def all(self) -> List[SQLModel]:
        return [row async for row in self]

    async def count(self) -> int:
        count_stmt = select(func.count()).select_from(self.statement.order_by(None).subquery())
        result = await self._session.execute(count_stmt)
        return result.scalar_one()


# ------------------------------------------------------------
# READS
# ------------------------------------------------------------
def list_owned(
    session: AsyncSession,
    ctx: AuthorizationContext,
    policy: EntityPolicy,
    filters: Optional[Mapping[str, Any]] = None,
) -> ScopedRows:
    return ScopedRows(session, scoped_select(ctx, policy, filters))


async def count_owned(
    session: AsyncSession,
    ctx: AuthorizationContext,
    policy: EntityPolicy,
    filters: Optional[Mapping[str, Any]] = None,
) -> int:
    return await list_owned(session, ctx, policy, filters).count()


async def get_owned(
    session: AsyncSession,
    ctx: AuthorizationContext,
    policy: EntityPolicy,
    target_id: uuid.UUID,
):
    statement = scoped_select(ctx, policy).where(policy.column("id") == target_id)
    result = await session.execute(statement)
    row = result.scalars().first()

    if row is None:
        raise NotFound(f"{policy.name} {target_id} absent or out of scope")
    return row


# ------------------------------------------------------------
# WRITES
# ------------------------------------------------------------
def _require_writer(ctx: AuthorizationContext, policy: EntityPolicy, op: str) -> None:
    if op == "create" and policy.intake:
        return
    if ctx.effective_role not in policy.write_roles:
        raise InsufficientRole(f"{ctx.effective_role} {ctx.principal_id} cannot {op} {policy.name}")


def _check_department(ctx: AuthorizationContext, department_id: Optional[str]) -> None:
    if ctx.is_admin:
        return
    if department_id is None or not ctx.can_access_department(department_id):
        raise ScopeMismatch(f"department {department_id!r} outside grants of {ctx.principal_id}")


async def _require_department_exists(session: AsyncSession, department_id: str) -> None:
    result = await session.execute(select(Department.id).where(Department.id == department_id))
    if result.scalar_one_or_none() is None:
        raise ValidationError.for_field("department_id", "Unknown department")


def _validate_values(policy: EntityPolicy, data: Dict[str, Any], partial: bool) -> Dict[str, Any]:
    columns = policy.model.__table__.columns
    clean: Dict[str, Any] = {}

    for key, value in data.items():
        if key in policy.protected_fields or key not in columns:
            continue

        if key in policy.enum_fields and value is not None:
            enum_cls = policy.enum_fields[key]
            try:
                value = enum_cls(value)
            except ValueError:
                allowed = ", ".join(m.value for m in enum_cls)
                raise ValidationError.for_field(key, f"Must be one of: {allowed}")

        if value is None and not columns[key].nullable:
            raise ValidationError.for_field(key, "May not be empty")

        clean[key] = value

    if not partial:
        for column in columns:
            if (
                not column.nullable
                and column.name not in clean
                and column.name not in policy.protected_fields
                and column.default is None
                and policy.model.model_fields.get(column.name) is not None
                and policy.model.model_fields[column.name].is_required()
            ):
                raise ValidationError.for_field(column.name, "Field required")

    return clean


async def _check_references(session, ctx, policy: EntityPolicy, data: Dict[str, Any]) -> None:
    for key, entity_name in policy.references.items():
        ref_id = data.get(key)
        if ref_id is None:
            continue
        try:
            await get_owned(session, ctx, POLICIES[entity_name], ref_id)
        except NotFound:
            raise ValidationError.for_field(key, "Unknown reference")


async def _commit(session: AsyncSession, policy: EntityPolicy, row):
    try:
        await session.commit()
    except IntegrityError as e:
        await session.rollback()
        logger.warning(f"Integrity error writing {policy.name}: {e.orig}")
        raise ValidationError.for_field(policy.name, "Conflicts with existing data")
    await session.refresh(row)
    return row


async def check_create(
    session: AsyncSession,
    ctx: AuthorizationContext,
    policy: EntityPolicy,
    patch: Mapping[str, Any],
) -> None:
    """
    Every check a create runs, without writing. Used before side effects
    (storage uploads) that must not happen for a rejected create.
    """
    _require_writer(ctx, policy, "create")

    if policy.department_scoped:
        department_id = patch.get("department_id")
        _check_department(ctx, department_id)
        if department_id is not None:
            await _require_department_exists(session, department_id)

    await _check_references(session, ctx, policy, patch)


async def _create(session, ctx, policy: EntityPolicy, patch: Mapping[str, Any]):
    data = _validate_values(policy, dict(patch), partial=False)
    await check_create(session, ctx, policy, data)

    if policy.owner_field:
        data[policy.owner_field] = ctx.principal_id

    row = policy.model(**data)
    session.add(row)
    row = await _commit(session, policy, row)
    logger.info(f"Created {policy.name} {row.id} by {ctx.principal_id or 'anonymous'}")
    return row


async def _update(session, ctx, policy: EntityPolicy, target_id, patch: Mapping[str, Any]):
    row = await get_owned(session, ctx, policy, target_id)
    changes = _validate_values(policy, dict(patch or {}), partial=True)

    if policy.department_scoped and "department_id" in changes:
        new_department = changes["department_id"]
        if new_department != row.department_id:
            _check_department(ctx, new_department)
            if new_department is not None:
                await _require_department_exists(session, new_department)

    await _check_references(session, ctx, policy, changes)

    for key, value in changes.items():
        setattr(row, key, value)
    if hasattr(row, "updated_at"):
        row.updated_at = datetime.utcnow()

    session.add(row)
    row = await _commit(session, policy, row)
    logger.info(f"Updated {policy.name} {row.id} fields={sorted(changes)} by {ctx.principal_id}")
    return row


async def _delete(session, ctx, policy: EntityPolicy, target_id):
    row = await get_owned(session, ctx, policy, target_id)
    await session.delete(row)
    await session.commit()
    logger.info(f"Deleted {policy.name} {target_id} by {ctx.principal_id}")
    return row


async def mutate_owned(
    session: AsyncSession,
    ctx: AuthorizationContext,
    policy: EntityPolicy,
    op: str,
    target_id: Optional[uuid.UUID] = None,
    patch: Optional[Mapping[str, Any]] = None,
):
    """
    op is "create", "update" or "delete". Every check runs before the
    session is asked to write anything.
    """
    _require_writer(ctx, policy, op)

    if op == "create":
        return await _create(session, ctx, policy, patch or {})
    if op == "update":
        return await _update(session, ctx, policy, target_id, patch or {})
    if op == "delete":
        return await _delete(session, ctx, policy, target_id)

    raise ValueError(f"Unknown operation: {op}")
