"""Load backup job configuration from a TOML file."""

import os
import tomllib
from pathlib import Path

from pydantic import ValidationError

from db_dumper.config.models import BackupConfig, DumperConfig
from db_dumper.exceptions import ConfigurationError

CONFIG_PATH_ENV = "DB_DUMPER_CONFIG"
DEFAULT_CONFIG_FILE = "dumper.toml"


def default_config_path() -> Path:
    """Return the config path from ``DB_DUMPER_CONFIG`` or ``./dumper.toml``."""
    env_path = os.environ.get(CONFIG_PATH_ENV)
    if env_path:
        return Path(env_path)
    return Path.cwd() / DEFAULT_CONFIG_FILE


def load_dumper_config(config_path: Path | None = None) -> DumperConfig:
    """Load backup jobs from a TOML file.

    Args:
        config_path: Path to dumper.toml (default: ``default_config_path()``)

    Returns:
        DumperConfig with all jobs

    Raises:
        FileNotFoundError: If config file doesn't exist
        ConfigurationError: If the file or any job in it is invalid
    """
    if config_path is None:
        config_path = default_config_path()
    config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(
            f"Dumper config not found: {config_path}\n"
            f"Create it with one [jobs.<name>] table per backup job."
        )

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigurationError(f"Invalid TOML in {config_path}: {e}") from e

    # Parse jobs
    jobs = {}
    for name, job_data in data.get("jobs", {}).items():
        if not isinstance(job_data, dict):
            raise ConfigurationError(f"Job '{name}' must be a table")
        try:
            jobs[name] = BackupConfig.model_validate(job_data)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid job '{name}': {e}") from e

    settings = data.get("settings", {})
    default_job = settings.get("default_job")
    if default_job is not None and default_job not in jobs:
        raise ConfigurationError(
            f"default_job '{default_job}' is not defined. "
            f"Available jobs: {', '.join(jobs) or '(none)'}"
        )

    return DumperConfig(jobs=jobs, default_job=default_job)
