"""Application configuration loaded from environment variables and .env file."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings.

    Values are loaded from environment variables first,
    then from a .env file in the project root as fallback.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
    )

    DATABASE_URL: str = "sqlite:///./mypet.db"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Tick scheduler
    TICK_INTERVAL_SECONDS: float = 30.0
    TICK_ENABLED: bool = True

    # Game rules enforced outside the pet entity
    MAX_PETS_PER_OWNER: int = 3
    HISTORY_PAGE_SIZE: int = 20
    MAX_GAME_COINS: int = 500

    OWNER_COOKIE_NAME: str = "owner_id"
    OWNER_COOKIE_MAX_AGE: int = 365 * 24 * 60 * 60


settings = Settings()
