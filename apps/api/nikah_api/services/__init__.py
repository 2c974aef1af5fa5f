from .auth import auth_service
from .account import account_service
from .lookup import lookup_service
from .moderation import moderation_service
from .profile import profile_service
from .suggestions import suggestion_service
from .taxonomy import taxonomy_service
from .verification import verification_service

__all__ = [
    "auth_service",
    "account_service",
    "lookup_service",
    "moderation_service",
    "profile_service",
    "suggestion_service",
    "taxonomy_service",
    "verification_service",
]
