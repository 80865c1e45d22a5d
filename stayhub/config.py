import os
from dotenv import load_dotenv

load_dotenv()


def _csv(value: str) -> frozenset[str]:
    return frozenset(part.strip().lower() for part in value.split(",") if part.strip())


class Settings:
    APP_NAME: str = os.getenv("APP_NAME", "StayHub")
    # Core settings
    SECRET_KEY: str = os.getenv("SECRET_KEY", "dev-secret-key-change-me")
    ENVIRONMENT: str = os.getenv("ENVIRONMENT", "development").lower()
    DEBUG: bool = os.getenv("DEBUG", "false").lower() == "true"

    # Auth & Session
    SESSION_COOKIE_NAME: str = os.getenv("SESSION_COOKIE_NAME", "stayhub_session")
    SESSION_MAX_AGE_DAYS: int = int(os.getenv("SESSION_MAX_AGE_DAYS", "30"))

    # Database
    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./stayhub.db")
    # "sql" (one session per request) or "memory" (process-local store)
    STORAGE_BACKEND: str = os.getenv("STORAGE_BACKEND", "sql").lower()
    # Demo host and listings created at startup when the store has no listings
    SEED_SAMPLE_DATA: bool = os.getenv("SEED_SAMPLE_DATA", "false").lower() == "true"
    SEED_HOST_USERNAME: str = os.getenv("SEED_HOST_USERNAME", "demo-host")
    SEED_HOST_PASSWORD: str = os.getenv("SEED_HOST_PASSWORD", "demo12345")

    # Booking policy: statuses listed here stop blocking their dates.
    # Empty means every booking blocks, whatever its status.
    CONFLICT_RELEASED_STATUSES: frozenset[str] = _csv(os.getenv("CONFLICT_RELEASED_STATUSES", ""))

    # Reviews
    REVIEW_RATING_MIN: int = int(os.getenv("REVIEW_RATING_MIN", "1"))
    REVIEW_RATING_MAX: int = int(os.getenv("REVIEW_RATING_MAX", "10"))

    # Stay quotes (smallest currency unit / percent)
    CLEANING_FEE: int = int(os.getenv("CLEANING_FEE", "50"))
    SERVICE_FEE_PERCENT: int = int(os.getenv("SERVICE_FEE_PERCENT", "12"))

    # Rate Limiting
    RATE_LIMIT_ENABLED: bool = os.getenv("RATE_LIMIT_ENABLED", "true").lower() == "true"
    RATE_LIMIT_AUTH: str = os.getenv("RATE_LIMIT_AUTH", "10/minute")

settings = Settings()
