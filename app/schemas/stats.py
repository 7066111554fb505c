from pydantic import BaseModel
from typing import Dict, Optional


class DashboardStats(BaseModel):
    total_events: int
    upcoming_events: int
    total_media: int
    media_by_type: Dict[str, int]
    # Intake counts are admin-only; department admins get None
    total_registrations: Optional[int] = None
    pending_registrations: Optional[int] = None
    pending_sponsorships: Optional[int] = None
    new_contact_messages: Optional[int] = None
