from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

_ROOT = Path(__file__).resolve().parent.parent


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    # ── General ─────────────────────────────────────────────────────────
    app_name: str = "Site Pulse"
    log_level: str = "INFO"
    cors_allow_origins: list[str] = ["*"]
    # Public site served for every path not handled by the API
    static_dir: Path = _ROOT / "public_html"

    # ── Presence ────────────────────────────────────────────────────────
    presence_window_seconds: float = Field(default=300, gt=0)
    # "fixed": every touch evicts on its own timer (first timer wins)
    # "sliding": a timer is ignored if the client was seen again since
    presence_mode: Literal["fixed", "sliding"] = "fixed"
    presence_sweep_interval_seconds: float = Field(default=30, gt=0)

    # ── Messages ────────────────────────────────────────────────────────
    # 0 keeps every message for the life of the process
    max_messages: int = Field(default=1000, ge=0)

    # ── Dashboard ───────────────────────────────────────────────────────
    weekly_window_days: int = Field(default=7, ge=0)
    recent_messages_limit: int = Field(default=10, ge=0)
    recent_activity_messages: int = Field(default=2, ge=0)
    home_path: str = "/"


@lru_cache
def get_settings() -> Settings:
    return Settings()
