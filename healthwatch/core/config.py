from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # App
    PROJECT_NAME: str = "Health Watch"
    API_V1_STR: str = "/api/v1"
    ENVIRONMENT: str = ""  # local, dev, prod (from .env)

    # MongoDB (from .env)
    MONGODB_URL: str = ""
    MONGODB_DB_NAME: str = ""

    # CORS (from .env, comma-separated)
    BACKEND_CORS_ORIGINS: List[str] = []

    # Logging & Sentry
    LOG_LEVEL: str = "INFO"
    SENTRY_DSN: str | None = None

    # Outbreak detection (rules file defaults to the one shipped with the module)
    OUTBREAK_RULES_PATH: str | None = None
    OUTBREAK_DETECTION_ENABLED: bool = True

    model_config = SettingsConfigDict(
        env_file=".env", case_sensitive=True, extra="ignore"
    )


settings = Settings()
