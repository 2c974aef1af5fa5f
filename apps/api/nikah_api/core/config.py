from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

# Load .env from apps/api so it works regardless of CWD
_env_file = Path(__file__).resolve().parent.parent.parent / ".env"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=_env_file, extra="ignore")

    database_url: str = "postgresql://localhost/nikahfirst"
    sql_echo: bool = False
    jwt_secret: str = "change-me-in-production"
    jwt_algorithm: str = "HS256"
    jwt_expire_minutes: int = 60 * 24 * 7  # 7 days

    # Rate limiting (per-user when key_func uses user id; multi-instance needs Redis later)
    auth_login_rate_limit: str = "10/minute"
    auth_register_rate_limit: str = "5/minute"
    auth_password_rate_limit: str = "5/minute"

    # Phone verification (OTP relayed to admins, who call the user)
    phone_otp_expire_hours: int = 24
    phone_otp_request_cooldown_minutes: int = 30
    phone_otp_max_attempts: int = 5
    phone_change_cooldown_days: int = 30

    # Email (SendGrid); reminders and admin notifications are skipped when unset
    sendgrid_api_key: str | None = None
    sendgrid_from_email: str | None = None
    sendgrid_from_name: str | None = "NikahFirst"
    admin_notification_email: str | None = None

    # CORS (comma-separated origins; * allows all)
    cors_origins: str = "*"

    @property
    def cors_origins_list(self) -> list[str]:
        """Parsed CORS origins for middleware."""
        raw = self.cors_origins.strip()
        return ["*"] if not raw else [o.strip() for o in raw.split(",") if o.strip()]

    @property
    def async_database_url(self) -> str:
        """Database URL rewritten for the asyncpg driver (Render hands out postgres://)."""
        url = self.database_url
        if url.startswith("postgres://"):
            return url.replace("postgres://", "postgresql+asyncpg://", 1)
        if url.startswith("postgresql://") and "asyncpg" not in url:
            return url.replace("postgresql://", "postgresql+asyncpg://", 1)
        return url


@lru_cache
def get_settings() -> Settings:
    return Settings()
