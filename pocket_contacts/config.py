"""Configuration helpers for Pocket Contacts."""
from __future__ import annotations

from dataclasses import dataclass
import logging
import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

DATA_DIR_ENV = "POCKET_CONTACTS_DATA_DIR"
CONTACTS_DIR_ENV = "POCKET_CONTACTS_DIR"
ENVIRONMENT_ENV = "POCKET_CONTACTS_ENV"
LOG_LEVEL_ENV = "POCKET_CONTACTS_LOG_LEVEL"

DEFAULT_DATA_DIR = Path.home() / ".pocket_contacts"
CONTACTS_SUBDIR = "contacts"


class ConfigError(RuntimeError):
    """Raised when configuration values are invalid."""


@dataclass(slots=True)
class Settings:
    """Runtime configuration shared by the CLI and the API."""

    contacts_dir: Path
    environment: str = "local"
    log_level: str = "INFO"


def resolve_contacts_dir() -> Path:
    """Return the contacts directory from the current environment.

    ``POCKET_CONTACTS_DIR`` wins when set; otherwise the directory is the
    ``contacts`` folder under ``POCKET_CONTACTS_DATA_DIR`` (or the default
    data directory in the user's home).
    """

    override = os.getenv(CONTACTS_DIR_ENV, "").strip()
    if override:
        return Path(override).expanduser()

    data_dir = os.getenv(DATA_DIR_ENV, "").strip()
    base = Path(data_dir).expanduser() if data_dir else DEFAULT_DATA_DIR
    return base / CONTACTS_SUBDIR


def load_settings(*, dotenv_path: Optional[str] = None) -> Settings:
    """Load settings from environment variables (and a ``.env`` file if present).

    Args:
        dotenv_path: Optional explicit path to a ``.env`` file.

    Returns:
        Settings with the resolved contacts directory.

    Raises:
        ConfigError: if the configured log level is not a known level name.
    """

    load_dotenv(dotenv_path)

    log_level = os.getenv(LOG_LEVEL_ENV, "INFO").strip().upper() or "INFO"
    if not isinstance(logging.getLevelName(log_level), int):
        raise ConfigError(
            f"Unknown log level {log_level!r}. Set {LOG_LEVEL_ENV} to one of "
            "DEBUG, INFO, WARNING, ERROR or CRITICAL."
        )

    environment = os.getenv(ENVIRONMENT_ENV, "local")

    return Settings(
        contacts_dir=resolve_contacts_dir(),
        environment=environment,
        log_level=log_level,
    )
