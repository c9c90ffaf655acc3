import os

# Database configuration
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./school_events.db")

# Redis configuration
REDIS_URL = os.getenv("REDIS_URL", "redis://localhost:6379/0")

# Per-event registration lock (seconds)
REGISTRATION_LOCK_TIMEOUT = float(os.getenv("REGISTRATION_LOCK_TIMEOUT", "10"))
REGISTRATION_LOCK_BLOCKING_TIMEOUT = float(os.getenv("REGISTRATION_LOCK_BLOCKING_TIMEOUT", "5"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

CORS_ORIGINS = os.getenv("CORS_ORIGINS", "*")


def get_database_url():
    return DATABASE_URL


def get_redis_url():
    return REDIS_URL


def get_lock_timeouts() -> tuple[float, float]:
    return REGISTRATION_LOCK_TIMEOUT, REGISTRATION_LOCK_BLOCKING_TIMEOUT


def get_log_level():
    return LOG_LEVEL.upper()


def get_cors_origins() -> list[str]:
    return [origin.strip() for origin in CORS_ORIGINS.split(",") if origin.strip()]
