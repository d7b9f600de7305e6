"""Application settings.

環境変数および``.env``ファイルから設定を読み込む唯一のエントリーポイント。
"""

from functools import lru_cache
from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def find_env_file(start: Path | None = None) -> Path | None:
    """カレントディレクトリから親方向に``.env``を探す.

    Args:
        start: 探索開始ディレクトリ（省略時はカレントディレクトリ）

    Returns:
        見つかった``.env``のパス、なければNone
    """
    current = (start or Path.cwd()).resolve()
    for directory in (current, *current.parents):
        candidate = directory / ".env"
        if candidate.is_file():
            return candidate
    return None


ENV_FILE_PATH = find_env_file()


class Settings(BaseSettings):
    """Application settings - all configurable via environment variables."""

    model_config = SettingsConfigDict(
        env_file=ENV_FILE_PATH,
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # LLM
    google_api_key: str | None = None
    llm_model_name: str = "gemini-2.5-flash"

    # Persistence
    database_url: str = "sqlite+aiosqlite:///./baobab.db"
    state_key_prefix: str = "baobab_"

    # Logging
    log_level: str = "INFO"
    log_json: bool = False

    # Quiz lifecycle
    quiz_sweep_interval_seconds: int = 60
    quiz_grace_period_minutes: int = 15

    @field_validator("log_level")
    @classmethod
    def _normalize_log_level(cls, v: str) -> str:
        return v.upper()

    @field_validator("quiz_sweep_interval_seconds")
    @classmethod
    def _positive(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("must be positive")
        return v

    @field_validator("quiz_grace_period_minutes")
    @classmethod
    def _non_negative(cls, v: int) -> int:
        if v < 0:
            raise ValueError("must be zero or positive")
        return v

    def get_database_url(self) -> str:
        """データベースURLを返す."""
        return self.database_url

    def has_llm_credentials(self) -> bool:
        """LLM APIキーが設定されているか."""
        return bool(self.google_api_key and self.google_api_key.strip())


@lru_cache
def get_settings() -> Settings:
    """キャッシュされた設定インスタンスを返す."""
    return Settings()


def reload_settings() -> Settings:
    """キャッシュを破棄して設定を再読み込みする."""
    global settings
    get_settings.cache_clear()
    settings = get_settings()
    return settings


settings = get_settings()
