"""Configuration from environment."""
import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from functools import lru_cache

from sqlalchemy.engine import URL

from utils.errors import ConfigurationError

REQUIRED_VARIABLES = (
    "MONGODB_URI",
    "POSTGRES_HOST",
    "POSTGRES_PORT",
    "POSTGRES_DB",
    "POSTGRES_USER",
    "POSTGRES_PASSWORD",
    "PORT",
)

DEFAULT_MONGODB_DATABASE = "reciclo"
DEFAULT_CORS_ORIGINS = ("http://localhost:3000", "http://127.0.0.1:3000")


@dataclass(frozen=True)
class Settings:
    """Settings required at startup. Built by load_settings()."""

    mongodb_uri: str
    postgres_host: str
    postgres_port: int
    postgres_db: str
    postgres_user: str
    postgres_password: str = field(repr=False)
    port: int
    mongodb_database: str = DEFAULT_MONGODB_DATABASE
    cors_origins: tuple[str, ...] = DEFAULT_CORS_ORIGINS

    @property
    def postgres_url(self) -> URL:
        """SQLAlchemy URL for the PostgreSQL connection (password kept out of str())."""
        return URL.create(
            "postgresql+psycopg2",
            username=self.postgres_user,
            password=self.postgres_password,
            host=self.postgres_host,
            port=self.postgres_port,
            database=self.postgres_db,
        )


def _parse_port(name: str, raw: str) -> int:
    try:
        port = int(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}") from None
    if not 0 < port < 65536:
        raise ConfigurationError(f"{name} out of range: {port}")
    return port


def parse_cors_origins(raw: str | None) -> tuple[str, ...]:
    """Comma separated origins; defaults when unset or empty."""
    origins = tuple(o.strip() for o in (raw or "").split(",") if o.strip())
    return origins or DEFAULT_CORS_ORIGINS


def load_settings(environ: Mapping[str, str] | None = None) -> Settings:
    """
    Read settings from environ (defaults to os.environ).
    Raises ConfigurationError naming every missing required variable.
    """
    env = os.environ if environ is None else environ
    values = {name: (env.get(name) or "").strip() for name in REQUIRED_VARIABLES}
    missing = [name for name, value in values.items() if not value]
    if missing:
        raise ConfigurationError(f"Missing required environment variables: {', '.join(missing)}")

    cors_origins = parse_cors_origins(env.get("CORS_ORIGINS"))
    return Settings(
        mongodb_uri=values["MONGODB_URI"],
        postgres_host=values["POSTGRES_HOST"],
        postgres_port=_parse_port("POSTGRES_PORT", values["POSTGRES_PORT"]),
        postgres_db=values["POSTGRES_DB"],
        postgres_user=values["POSTGRES_USER"],
        postgres_password=values["POSTGRES_PASSWORD"],
        port=_parse_port("PORT", values["PORT"]),
        mongodb_database=(env.get("MONGODB_DATABASE") or DEFAULT_MONGODB_DATABASE).strip(),
        cors_origins=cors_origins,
    )


@lru_cache()
def get_settings() -> Settings:
    """Settings from the process environment, loaded once."""
    return load_settings()
