# app/core/constants.py

from app.models.enums import MediaType, UserRole


class _AllDepartments:
    """
    Department scope of an admin. Membership is always true, so departments
    added later are in scope without re-enumerating anything.
    """

    def __contains__(self, department_id) -> bool:
        return True

    def __bool__(self) -> bool:
        return True

    def __repr__(self) -> str:
        return "ALL_DEPARTMENTS"


ALL_DEPARTMENTS = _AllDepartments()

# ==========================================================
# ROLE SETS USED BY ROUTES
# ==========================================================
ADMIN_ONLY = frozenset({UserRole.admin})
CONTENT_MANAGERS = frozenset({UserRole.admin, UserRole.department_admin})
ANY_ROLE = frozenset(UserRole)

# ==========================================================
# UPLOADS
# ==========================================================
ALLOWED_CONTENT_TYPES = {
    MediaType.photo: ("image/jpeg", "image/png", "image/webp", "image/gif"),
    MediaType.video: ("video/mp4", "video/webm", "video/quicktime"),
    MediaType.poster: ("image/jpeg", "image/png", "image/webp", "application/pdf"),
    MediaType.document: (
        "application/pdf",
        "application/msword",
        "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    ),
}
