from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = "LittleSteps API"
    app_env: str = "dev"
    log_level: str = "INFO"
    database_url: str = "sqlite+aiosqlite:///./littlesteps.db"
    cors_allow_origins: str = "http://localhost:5173"
    family_header_name: str = "X-Family-ID"
    app_timezone: str = "UTC"
    default_height_cm: float = 50.0
    default_weight_kg: float = 3.3
    default_page_size: int = 10
    max_page_size: int = 100
    media_backend: str = "local"
    media_root: str = "./media"
    media_url_prefix: str = "/api/media"
    public_base_url: str | None = None
    media_max_upload_mb: int = 10
    llm_provider: str = "mock"
    llm_model: str = "mock-journal-writer-v1"
    default_language: str = "en"
    advice_timeout_seconds: float = 30.0
    openai_api_key: str | None = None
    openai_model: str = "gpt-4o-mini"
    gemini_api_key: str | None = None
    gemini_model: str = "gemini-2.5-flash"
    cerebras_api_key: str | None = None
    cerebras_model: str = "gpt-oss-120b"

    @property
    def cors_origins(self) -> list[str]:
        return [x.strip() for x in self.cors_allow_origins.split(",") if x.strip()]

    @property
    def media_max_upload_bytes(self) -> int:
        return max(0, self.media_max_upload_mb) * 1024 * 1024


@lru_cache
def get_settings() -> Settings:
    return Settings()
