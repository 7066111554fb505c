# app/services/stats_service.py

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.rbac import AuthorizationContext
from app.models.enums import ContactStatus, EventStatus, MediaType, RegistrationStatus, SponsorshipStatus
from app.schemas.stats import DashboardStats
from app.services.scoped_query import (
    CONTACT_MESSAGES,
    EVENTS,
    MEDIA,
    REGISTRATIONS,
    SPONSORSHIPS,
    count_owned,
)


async def dashboard_stats(session: AsyncSession, ctx: AuthorizationContext) -> DashboardStats:
    """
    Counts for the dashboard header. Every number goes through the same
    scope as the listings, so a department admin only counts their own rows.
    """
    stats = DashboardStats(
        total_events=await count_owned(session, ctx, EVENTS),
        upcoming_events=await count_owned(session, ctx, EVENTS, {"status": EventStatus.upcoming}),
        total_media=await count_owned(session, ctx, MEDIA),
        media_by_type={
            media_type.value: await count_owned(session, ctx, MEDIA, {"media_type": media_type})
            for media_type in MediaType
        },
    )

    if ctx.is_admin:
        stats.total_registrations = await count_owned(session, ctx, REGISTRATIONS)
        stats.pending_registrations = await count_owned(
            session, ctx, REGISTRATIONS, {"status": RegistrationStatus.pending}
        )
        stats.pending_sponsorships = await count_owned(
            session, ctx, SPONSORSHIPS, {"status": SponsorshipStatus.pending}
        )
        stats.new_contact_messages = await count_owned(
            session, ctx, CONTACT_MESSAGES, {"status": ContactStatus.new}
        )

    return stats
