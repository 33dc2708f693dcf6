"""Application settings and validation.

Settings are read once at process start and handed to `create_app`;
nothing in the service reads the environment on its own.
"""

import os
from pathlib import Path
from typing import List, Mapping, Optional

BASE = Path(__file__).resolve().parent.parent
DEFAULT_DATABASE_URL = f"sqlite:///{BASE / 'app.db'}"


class Settings:
    ENV: str
    HOST: str
    PORT: int
    CORS_ORIGINS: List[str]
    DATABASE_URL: str
    LOG_LEVEL: str

    def __init__(
        self,
        env: str = "dev",
        host: str = "0.0.0.0",
        port: int = 3000,
        cors_origins: Optional[List[str]] = None,
        database_url: str = DEFAULT_DATABASE_URL,
        log_level: str = "INFO",
    ):
        self.ENV = env.lower()
        self.HOST = host
        self.PORT = port
        self.CORS_ORIGINS = cors_origins if cors_origins is not None else ["*"]
        self.DATABASE_URL = database_url
        self.LOG_LEVEL = log_level.upper()
        self._validate()

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """Build settings from environment variables (or any mapping)."""
        environ = os.environ if environ is None else environ
        port_raw = environ.get("PORT", "3000")
        try:
            port = int(port_raw)
        except ValueError:
            raise RuntimeError(f"PORT must be an integer, got {port_raw!r}")
        origins = [o.strip() for o in environ.get("CORS_ORIGIN", "*").split(",") if o.strip()]
        return cls(
            env=environ.get("ENV", "dev"),
            host=environ.get("HOST", "0.0.0.0"),
            port=port,
            cors_origins=origins,
            database_url=environ.get("DATABASE_URL", DEFAULT_DATABASE_URL),
            log_level=environ.get("LOG_LEVEL", "INFO"),
        )

    def _validate(self):
        if not 1 <= self.PORT <= 65535:
            raise RuntimeError(f"PORT must be between 1 and 65535, got {self.PORT}")
        if not self.CORS_ORIGINS:
            raise RuntimeError("CORS_ORIGIN must name at least one origin")
        if not self.DATABASE_URL:
            raise RuntimeError("DATABASE_URL must not be empty")
        if self.LOG_LEVEL not in ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"):
            raise RuntimeError(f"LOG_LEVEL {self.LOG_LEVEL!r} is not a valid logging level")
