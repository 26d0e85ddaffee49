# task_manager/config/settings.py
# Runtime configuration read from the environment (and a local .env file)

import logging
import os
from datetime import timedelta
from typing import List, Optional

from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)

DEFAULT_JWT_SECRET = "task-test-secret-key"

DEFAULT_CORS_ORIGINS = [
    "http://localhost:3000",   # Local development frontend
    "http://localhost:5173",   # Vite dev server
    "http://127.0.0.1:3000",  # Alternative localhost
]


def _env_list(name: str, default: List[str]) -> List[str]:
    raw = os.getenv(name)
    if not raw:
        return list(default)
    return [item.strip() for item in raw.split(",") if item.strip()]


class Settings:
    """Application settings

    Every value falls back to an environment variable, so tests can build an
    isolated instance with ``Settings(database_url=..., jwt_secret=...)``.
    """

    def __init__(
        self,
        database_url: Optional[str] = None,
        jwt_secret: Optional[str] = None,
        jwt_algorithm: Optional[str] = None,
        access_token_expire_hours: Optional[int] = None,
        bcrypt_rounds: Optional[int] = None,
        cors_origins: Optional[List[str]] = None,
        log_level: Optional[str] = None,
    ):
        self.database_url = database_url or os.getenv("DATABASE_URL", "sqlite:///./tasks.db")
        self.jwt_secret = jwt_secret or os.getenv("JWT_SECRET", DEFAULT_JWT_SECRET)
        self.jwt_algorithm = jwt_algorithm or os.getenv("JWT_ALGORITHM", "HS256")
        self.access_token_expire_hours = int(
            access_token_expire_hours or os.getenv("ACCESS_TOKEN_EXPIRE_HOURS", 24)
        )
        self.bcrypt_rounds = int(bcrypt_rounds or os.getenv("BCRYPT_ROUNDS", 12))
        self.cors_origins = cors_origins if cors_origins is not None else _env_list("CORS_ORIGINS", DEFAULT_CORS_ORIGINS)
        self.log_level = (log_level or os.getenv("LOG_LEVEL", "INFO")).upper()

    @property
    def access_token_expires(self) -> timedelta:
        return timedelta(hours=self.access_token_expire_hours)

    def warn_if_insecure(self) -> None:
        """Log a warning when the development signing secret is in use"""
        if self.jwt_secret == DEFAULT_JWT_SECRET:
            logger.warning("JWT_SECRET is not set, using the development secret")
