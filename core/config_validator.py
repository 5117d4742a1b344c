# core/config_validator.py

from typing import List
from core.config import settings
from core.logging_config import logger


VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
KNOWN_ENVIRONMENTS = {"development", "staging", "production", "test"}


def validate_required_config() -> List[str]:
    """
    Validate settings that must be correct for the core to work.
    Returns list of problems found.
    """
    problems = []

    if not settings.PROJECT_NAME or not settings.PROJECT_NAME.strip():
        problems.append("PROJECT_NAME must not be empty")
    if settings.LOG_LEVEL.upper() not in VALID_LOG_LEVELS:
        problems.append(f"LOG_LEVEL '{settings.LOG_LEVEL}' is not a logging level")

    return problems


def validate_optional_config() -> List[str]:
    """
    Validate optional settings.
    Returns list of warnings (never fatal).
    """
    warnings = []

    if settings.ENV not in KNOWN_ENVIRONMENTS:
        warnings.append(f"ENV '{settings.ENV}' is not one of {sorted(KNOWN_ENVIRONMENTS)}")
    if settings.ENV == "production" and settings.LOG_LEVEL.upper() == "DEBUG":
        warnings.append("LOG_LEVEL is DEBUG in production")

    return warnings


def validate_config_on_startup():
    """
    Validate configuration on application startup.
    Raises RuntimeError if critical config is invalid.
    Logs warnings for optional config.
    """
    problems = validate_required_config()
    warnings = validate_optional_config()

    if problems:
        error_msg = f"Invalid configuration: {'; '.join(problems)}"
        logger.error(error_msg)
        raise RuntimeError(error_msg)

    for warning in warnings:
        logger.warning(f"Configuration warning: {warning}")

    logger.info("Configuration validation passed")
