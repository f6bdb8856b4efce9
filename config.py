"""
Application configuration module.

This module defines configuration classes for different environments
(development, testing, production). Values come from environment
variables, optionally seeded from ``.env`` files, so the same code can
serve any environment by changing only its environment.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path

from dotenv import load_dotenv
from sqlalchemy.engine import make_url
from sqlalchemy.exc import ArgumentError

# Base directory of the project
BASE_DIR = Path(__file__).resolve().parent

DATABASE_KEYS: tuple[str, ...] = (
    "DATABASE_URL",
    "DATABASE_DRIVER_NAME",
    "DATABASE_USER",
    "DATABASE_PASSWORD",
)

# The password may legitimately be empty; the rest must carry a value.
_OPTIONAL_VALUE_KEYS = frozenset({"DATABASE_PASSWORD"})


def load_env(env_name: str | None = None) -> None:
    """
    Load ``.env`` and ``.env.<env_name>`` files into the process environment.

    The working directory is searched before the project root. Variables
    already present in the environment win over the generic ``.env`` file;
    the environment-specific file overrides both.
    """
    env_name = env_name or os.environ.get("FLASK_ENV", "development")
    candidates = [Path.cwd(), BASE_DIR]

    for base in candidates:
        env_path = base / ".env"
        if env_path.exists():
            load_dotenv(env_path)
            break

    for base in candidates:
        env_specific = base / f".env.{env_name}"
        if env_specific.exists():
            load_dotenv(env_specific, override=True)
            break


def build_database_uri(environ: Mapping[str, str]) -> str:
    """
    Assemble the SQLAlchemy connection URL from the four database keys.

    ``DATABASE_URL`` supplies host, port, database and query options;
    ``DATABASE_DRIVER_NAME`` replaces its dialect/driver part and the
    user/password keys replace any credentials embedded in it.

    Raises:
        RuntimeError: If any key is missing, naming every missing key.
    """
    missing = [
        key
        for key in DATABASE_KEYS
        if key not in environ
        or (key not in _OPTIONAL_VALUE_KEYS and not environ[key].strip())
    ]
    if missing:
        raise RuntimeError(
            f"Missing database configuration: set {', '.join(missing)}. "
            "Check the .env file or the process environment."
        )

    try:
        url = make_url(environ["DATABASE_URL"].strip())
    except ArgumentError as exc:
        raise RuntimeError(
            f"DATABASE_URL is not a valid database URL: {environ['DATABASE_URL']!r}"
        ) from exc

    url = url.set(
        drivername=environ["DATABASE_DRIVER_NAME"].strip(),
        username=environ["DATABASE_USER"].strip(),
        password=environ["DATABASE_PASSWORD"],
    )
    return url.render_as_string(hide_password=False)


def load_database_uri(*, testing: bool, environ: Mapping[str, str] | None = None) -> str:
    """Resolve the database URL for the selected environment."""
    environ = os.environ if environ is None else environ
    if testing:
        return environ.get("TEST_DATABASE_URL", "").strip() or "sqlite://"
    return build_database_uri(environ)


def load_port(environ: Mapping[str, str] | None = None) -> int:
    """Return ``APP_PORT`` as an integer, defaulting to 8080."""
    environ = os.environ if environ is None else environ
    raw_port = environ.get("APP_PORT", "").strip() or "8080"
    try:
        return int(raw_port)
    except ValueError as exc:
        raise RuntimeError(f"APP_PORT must be a number, got {raw_port!r}.") from exc


class Config:
    """Base configuration with default settings."""

    SQLALCHEMY_TRACK_MODIFICATIONS: bool = False

    # Default page window for GET /tasks
    DEFAULT_PAGE_LIMIT: int = 50
    DEFAULT_PAGE_OFFSET: int = 0


class DevelopmentConfig(Config):
    """Development environment configuration."""

    DEBUG: bool = True
    TESTING: bool = False


class TestingConfig(Config):
    """Testing environment configuration."""

    DEBUG: bool = True
    TESTING: bool = True


class ProductionConfig(Config):
    """Production environment configuration."""

    DEBUG: bool = False
    TESTING: bool = False


# Configuration mapping for easy access
config = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig,
    "default": DevelopmentConfig,
}


def get_config(env: str | None = None) -> type[Config]:
    """
    Get the configuration class for the specified environment.

    Args:
        env: Environment name (development, testing, production).
             If None, uses FLASK_ENV environment variable.

    Returns:
        Configuration class for the specified environment.
    """
    if env is None:
        env = os.environ.get("FLASK_ENV", "development")
    return config.get(env, config["default"])
