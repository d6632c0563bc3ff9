"""Configuration management: job models and TOML loading.

Usage:
    >>> from db_dumper.config import load_dumper_config, BackupConfig, Engine
"""

from db_dumper.config.loader import load_dumper_config
from db_dumper.config.models import BackupConfig, DumperConfig, Engine

__all__ = ["load_dumper_config", "BackupConfig", "DumperConfig", "Engine"]
