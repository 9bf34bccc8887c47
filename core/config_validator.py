# core/config_validator.py

from typing import List
from core.config import settings
from core.logging_config import logger


# Auth + data access need the service role client
REQUIRED_SETTINGS = ("SUPABASE_URL", "SUPABASE_SERVICE_ROLE_KEY")


def validate_required_config() -> List[str]:
    """Names of required settings that are unset or blank."""
    return [name for name in REQUIRED_SETTINGS if not getattr(settings, name, None)]


def validate_config_on_startup():
    """
    Raise RuntimeError when a required setting is missing.
    SUPABASE_ANON_KEY is only recommended, so its absence is logged.
    """
    missing = validate_required_config()
    if missing:
        error_msg = f"Missing required environment variables: {', '.join(missing)}"
        logger.error(error_msg)
        raise RuntimeError(error_msg)

    if not settings.SUPABASE_ANON_KEY:
        logger.warning("Optional configuration missing: SUPABASE_ANON_KEY")

    logger.info("Configuration validation passed")
