from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    TRELLO_APP_KEY: str | None = None
    TRELLO_USER_TOKEN: str | None = None

    TRELLO_BASE_URL: str = "https://api.trello.com/1"
    TRELLO_HTTP_TIMEOUT: float = 30.0
    TRELLO_MAX_RETRIES: int = 3

    # Synchronization
    TRELLO_REFRESH_THROTTLE: float = 5.0  # 秒
    TRELLO_CACHE_ENABLED: bool = True

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )


settings = Settings()
