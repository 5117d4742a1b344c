from pydantic_settings import BaseSettings
from pydantic import Field


class Settings(BaseSettings):
    # -------------------------------------------------
    # General
    # -------------------------------------------------
    PROJECT_NAME: str = "JustArchiv"
    ENV: str = "development"

    # -------------------------------------------------
    # Logging
    # -------------------------------------------------
    LOG_LEVEL: str = Field("INFO", description="Level applied to the justarchiv logger")

    # Warn whenever an unrecognised role string is resolved to "no permissions"
    UNKNOWN_ROLE_WARNINGS: bool = Field(True, description="Log unknown role strings")

    # -------------------------------------------------
    # Model Config
    # -------------------------------------------------
    class Config:
        case_sensitive = True


# Instantiate settings
settings = Settings()
