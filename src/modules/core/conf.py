"""Application configuration.

``AppConfig`` is built exactly once, in ``config/settings.py``, and exposed
as ``settings.APP_CONFIG``.  Components that need configuration (e.g. the
API-key authentication class) receive it through their constructor instead
of reading the process environment themselves.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Tuple

from decouple import Csv, config


@dataclass(frozen=True)
class AppConfig:
    """Immutable snapshot of the environment-driven settings."""

    secret_key: str
    api_key: str = ""
    database_url: str = ""
    debug: bool = False
    allowed_hosts: Tuple[str, ...] = field(default=("127.0.0.1", "localhost"))
    cors_allowed_origins: Tuple[str, ...] = field(
        default=("http://localhost:3000",)
    )
    log_level: str = "INFO"

    @property
    def api_key_configured(self) -> bool:
        return bool(self.api_key)

    @classmethod
    def from_env(cls, default_database_url: str = "") -> AppConfig:
        """Read the configuration from the environment (or a ``.env`` file).

        ``SECRET_KEY`` has no default: a missing value fails fast at startup.
        """
        return cls(
            secret_key=config("SECRET_KEY"),
            api_key=config("API_KEY", default=""),
            database_url=config("DATABASE_URL", default=default_database_url),
            debug=config("DEBUG", default=False, cast=bool),
            allowed_hosts=tuple(
                config("ALLOWED_HOSTS", default="127.0.0.1,localhost", cast=Csv())
            ),
            cors_allowed_origins=tuple(
                config(
                    "CORS_ALLOWED_ORIGINS",
                    default="http://localhost:3000",
                    cast=Csv(),
                )
            ),
            log_level=config("LOG_LEVEL", default="INFO").upper(),
        )
