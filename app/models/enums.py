from enum import Enum


class UserRole(str, Enum):
    user = "user"
    department_admin = "department_admin"
    admin = "admin"


class EventStatus(str, Enum):
    upcoming = "upcoming"
    ongoing = "ongoing"
    completed = "completed"


class MediaType(str, Enum):
    photo = "photo"
    video = "video"
    poster = "poster"
    document = "document"


class RegistrationStatus(str, Enum):
    pending = "pending"
    approved = "approved"
    rejected = "rejected"


class SponsorshipStatus(str, Enum):
    pending = "pending"
    contacted = "contacted"
    approved = "approved"
    rejected = "rejected"


class ContactStatus(str, Enum):
    new = "new"
    read = "read"
    replied = "replied"


class PostType(str, Enum):
    announcement = "announcement"
    summary = "summary"
    news = "news"
    form = "form"
