"""Core configuration, auth, and shared infrastructure."""

from nikah_api.core.config import Settings, get_settings
from nikah_api.core.constants import (
    ADMIN_ROLES,
    MODERATOR_ROLES,
    PHOTO_DELETE_ROLES,
    TAXONOMY_ROLES,
    SYSTEM_LANGUAGE_SLUGS,
    utcnow,
    as_utc,
)
from nikah_api.core.auth import (
    verify_password,
    hash_password,
    create_access_token,
    decode_access_token,
)
from nikah_api.core.limiter import limiter

__all__ = [
    "Settings",
    "get_settings",
    "ADMIN_ROLES",
    "MODERATOR_ROLES",
    "PHOTO_DELETE_ROLES",
    "TAXONOMY_ROLES",
    "SYSTEM_LANGUAGE_SLUGS",
    "utcnow",
    "as_utc",
    "verify_password",
    "hash_password",
    "create_access_token",
    "decode_access_token",
    "limiter",
]
