"""Runtime settings loaded from the environment (or a local ``.env`` file)."""

from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/124.0.0.0 Safari/537.36"
)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="CATALOG_SCRAPER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Seconds to wait for a single page before giving up on it
    REQUEST_TIMEOUT: float = 15.0
    USER_AGENT: str = DEFAULT_USER_AGENT
    RETRIES: int = 0
    LOG_LEVEL: str = "INFO"


settings = Settings()
