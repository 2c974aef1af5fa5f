from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class ConsoleSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="NIKAH_CONSOLE_", env_file=".env", extra="ignore")

    api_base_url: str = "http://localhost:8000"
    api_token: str | None = None
    request_timeout: float = 15.0
    # Dialogs close this long after a successful save
    success_close_delay: float = 1.5


@lru_cache
def get_console_settings() -> ConsoleSettings:
    return ConsoleSettings()
