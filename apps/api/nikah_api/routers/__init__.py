from .auth import router as auth_router
from .profile import router as profile_router
from .lookup import router as lookup_router
from .taxonomy import router as taxonomy_router
from .admin_profiles import router as admin_profiles_router
from .verification import router as verification_router
from .suggestions import router as suggestions_router

ROUTERS = (
    auth_router,
    profile_router,
    lookup_router,
    taxonomy_router,
    admin_profiles_router,
    verification_router,
    suggestions_router,
)

__all__ = [
    "ROUTERS",
    "auth_router",
    "profile_router",
    "lookup_router",
    "taxonomy_router",
    "admin_profiles_router",
    "verification_router",
    "suggestions_router",
]
