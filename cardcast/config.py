from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings loaded from CARDCAST_* environment variables."""

    model_config = SettingsConfigDict(env_prefix="CARDCAST_", env_file=".env", extra="ignore")

    api_endpoint: str = "https://api.cardcastgame.com/v1/decks/"

    # Seconds per request (connect + read)
    request_timeout: float = 10.0

    user_agent: str = "cardcast-python/0.1"

    # Decks older than this are refetched on the next lookup
    cache_ttl_seconds: float = 300.0

    log_level: str = "INFO"


settings = Settings()
