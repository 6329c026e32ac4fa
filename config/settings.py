from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Server
    PORT: int = 3000
    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: str = "*"

    # Outbound requests
    REQUEST_TIMEOUT_SECONDS: float = 10.0
    MAX_REDIRECTS: int = 5

    # Extraction
    NAME_MAX_LENGTH: int = 100

    # Mirrors (primary first)
    TWITTER_MIRRORS: str = "fxtwitter.com,vxtwitter.com"
    INSTAGRAM_MIRROR: str = "ddinstagram.com"
    REDDIT_BASE_URL: str = "https://www.reddit.com"

    # Launch endpoint
    LAUNCH_COOLDOWN_SECONDS: float = 90.0
    REQUEST_LOG_SIZE: int = 100

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
