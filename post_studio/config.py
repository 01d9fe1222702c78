"""Application configuration from environment."""
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

# Project root (parent of post_studio/); .env is loaded from here so it works regardless of CWD
_PROJECT_ROOT = Path(__file__).resolve().parent.parent
_ENV_FILE = _PROJECT_ROOT / ".env"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=_ENV_FILE if _ENV_FILE.exists() else ".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Database (Supabase: use Connection string from Supabase Dashboard → Settings → Database)
    database_url: str = ""

    # Supabase project URL + anon key, used for the Realtime change feed
    supabase_url: str = ""
    supabase_key: str = ""

    # Table the workflow writes generated drafts into
    drafts_table: str = "linkedin_drafts"

    @property
    def database_url_sync(self) -> str:
        """Sync URL for Alembic (replace +asyncpg with empty string)."""
        if not self.database_url:
            return ""
        return self.database_url.replace("+asyncpg", "") if "+asyncpg" in self.database_url else self.database_url

    @property
    def realtime_enabled(self) -> bool:
        return bool(self.supabase_url.strip() and self.supabase_key.strip())

    # Draft watching
    poll_interval_seconds: float = 3.0
    progress_tick_seconds: float = 1.0
    webhook_timeout_seconds: float = 15.0
    # 0 keeps waiting for the image indefinitely
    generation_timeout_seconds: float = 0.0

    # App
    log_level: str = "INFO"


settings = Settings()
