"""Engine configuration settings."""
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache
from typing import Literal


class Settings(BaseSettings):
    """Runtime settings.

    Nothing here changes a numeric result; clinical constants live in
    ``clinical_safety.constants``.
    """

    APP_NAME: str = "Clinical Safety Rules Engine"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    # Allergy matcher for the default checker and the CLI
    ALLERGY_MATCHER: Literal["substring", "token"] = "substring"

    # CLI output
    JSON_INDENT: int = 2

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="CLINICAL_SAFETY_",
        case_sensitive=True,
        extra="ignore",
    )


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
