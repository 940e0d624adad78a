# ==============================================
# Configuration Management
# ==============================================
#
# PURPOSE:
#   Load and validate all configuration from environment
#   variables / .env file. Provides typed config objects
#   to all other modules.
#
# CLASSES:
# --------
# - PocketBaseConfig (dataclass)
#     url: str                    (default "http://localhost:8090")
#     admin_email: str            (default "")
#     admin_password: str         (default "")
#     timeout_seconds: float      (default 30.0)
#
# - ImportConfig (dataclass)
#     batch_size: int             (default 50, PocketBase max batch)
#     sample_size: int            (default 1000)
#     input_dir: str              (default "input/")
#
# - AppConfig (dataclass)
#     pocketbase: PocketBaseConfig
#     importing: ImportConfig
#
# FUNCTION:
# ---------
# - get_config() -> AppConfig
#     Load .env using python-dotenv, construct AppConfig.
#     Returns the same singleton on repeated calls.
#
# USAGE:
# ------
#   from pb_import.config import get_config
#   config = get_config()
#   print(config.pocketbase.url)
#   print(config.importing.batch_size)
#
# ==============================================

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from pb_import.errors import ConfigError

DEFAULT_POCKETBASE_URL = "http://localhost:8090"
DEFAULT_BATCH_SIZE = 50
DEFAULT_SAMPLE_SIZE = 1000
DEFAULT_INPUT_DIR = "input/"
DEFAULT_TIMEOUT_SECONDS = 30.0


@dataclass
class PocketBaseConfig:
    """PocketBase server and admin credentials."""
    url: str = DEFAULT_POCKETBASE_URL
    admin_email: str = ""
    admin_password: str = ""
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS


@dataclass
class ImportConfig:
    """Sampling and batching limits for one import run."""
    batch_size: int = DEFAULT_BATCH_SIZE
    sample_size: int = DEFAULT_SAMPLE_SIZE
    input_dir: str = DEFAULT_INPUT_DIR


@dataclass
class AppConfig:
    """Main application configuration."""
    pocketbase: PocketBaseConfig = field(default_factory=PocketBaseConfig)
    importing: ImportConfig = field(default_factory=ImportConfig)


# Singleton instance
_config_instance: Optional[AppConfig] = None


def get_config() -> AppConfig:
    """
    Load configuration from environment variables / .env file.
    Returns the same singleton instance on repeated calls.

    Returns:
        AppConfig: Application configuration

    Raises:
        ConfigError: If a numeric variable is malformed or out of range.
    """
    global _config_instance

    if _config_instance is not None:
        return _config_instance

    # .env in the working directory wins over one next to the package
    load_dotenv(dotenv_path=Path.cwd() / ".env")
    load_dotenv(dotenv_path=Path(__file__).parent.parent / ".env")

    pocketbase_config = PocketBaseConfig(
        url=os.getenv("POCKETBASE_URL", DEFAULT_POCKETBASE_URL),
        admin_email=os.getenv("ADMIN_EMAIL", ""),
        admin_password=os.getenv("ADMIN_PASSWORD", ""),
        timeout_seconds=_parse_float("REQUEST_TIMEOUT_SECONDS", DEFAULT_TIMEOUT_SECONDS),
    )

    import_config = ImportConfig(
        batch_size=parse_positive_int(
            os.getenv("BATCH_SIZE", str(DEFAULT_BATCH_SIZE)), "BATCH_SIZE"
        ),
        sample_size=parse_positive_int(
            os.getenv("SAMPLE_SIZE", str(DEFAULT_SAMPLE_SIZE)), "SAMPLE_SIZE"
        ),
        input_dir=os.getenv("INPUT_DIR", DEFAULT_INPUT_DIR),
    )

    _config_instance = AppConfig(
        pocketbase=pocketbase_config,
        importing=import_config,
    )

    return _config_instance


def reset_config() -> None:
    """Forget the cached singleton so the next get_config() re-reads the environment."""
    global _config_instance
    _config_instance = None


def parse_positive_int(raw_value: str, name: str) -> int:
    """
    Parse a strictly positive integer setting.

    Args:
        raw_value: Raw string from the environment or the command line
        name: Setting name used in the error message

    Returns:
        The parsed integer

    Raises:
        ConfigError: If the value is not an integer or is below 1
    """
    try:
        value = int(raw_value)
    except (TypeError, ValueError) as error:
        raise ConfigError(
            f"Invalid {name} value: expected an integer, got '{raw_value}'"
        ) from error
    if value < 1:
        raise ConfigError(f"Invalid {name} value: must be at least 1, got {value}")
    return value


def _parse_float(name: str, default: float) -> float:
    raw_value = os.getenv(name)
    if raw_value is None or raw_value == "":
        return default
    try:
        value = float(raw_value)
    except ValueError as error:
        raise ConfigError(
            f"Invalid {name} value: expected a number, got '{raw_value}'"
        ) from error
    if value <= 0:
        raise ConfigError(f"Invalid {name} value: must be positive, got {value}")
    return value
