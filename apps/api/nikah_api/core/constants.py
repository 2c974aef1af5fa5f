"""Shared API constants."""

from datetime import datetime, timezone

USER_ROLE = "USER"
SUPER_ADMIN = "SUPER_ADMIN"
SUPERVISOR = "SUPERVISOR"
CONTENT_EDITOR = "CONTENT_EDITOR"
SUPPORT_AGENT = "SUPPORT_AGENT"

ADMIN_ROLES = (SUPER_ADMIN, SUPERVISOR, CONTENT_EDITOR, SUPPORT_AGENT)
MODERATOR_ROLES = (CONTENT_EDITOR, SUPERVISOR, SUPER_ADMIN)
PHOTO_DELETE_ROLES = (SUPERVISOR, SUPER_ADMIN)
TAXONOMY_ROLES = (SUPER_ADMIN,)

# Language rows the platform depends on; the server refuses to delete them
SYSTEM_LANGUAGE_SLUGS = frozenset({"other_language"})


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: datetime | None) -> datetime | None:
    """Attach UTC to naive datetimes (SQLite drops tzinfo on round-trip)."""
    if value is None or value.tzinfo is not None:
        return value
    return value.replace(tzinfo=timezone.utc)
