"""db-dumper: build and run database dump/restore commands.

Maps one uniform set of backup options onto the command-line dialects of
mysqldump/mysql, pg_dump/psql and mongodump/mongorestore, then runs the
assembled command through the shell with a timeout.

Usage:
    from db_dumper import Dumper, BackupConfig, Engine
    from db_dumper import load_dumper_config
    from db_dumper import ConfigurationError, ProcessFailedError
"""

__version__ = "0.1.0"

# Config
from db_dumper.config.loader import load_dumper_config
from db_dumper.config.models import BackupConfig, DumperConfig, Engine

# Dumper
from db_dumper.dumper import Dumper

# Commands
from db_dumper.commands.assembler import remove_extra_spaces

# Process runner
from db_dumper.process import run_shell_command

# Errors
from db_dumper.exceptions import (
    ConfigurationError,
    DumperError,
    ProcessFailedError,
    ProcessTimeoutError,
    UnsupportedEngineError,
)

__all__ = [
    # Config
    "load_dumper_config",
    "BackupConfig",
    "DumperConfig",
    "Engine",
    # Dumper
    "Dumper",
    # Commands
    "remove_extra_spaces",
    # Process runner
    "run_shell_command",
    # Errors
    "DumperError",
    "ConfigurationError",
    "UnsupportedEngineError",
    "ProcessFailedError",
    "ProcessTimeoutError",
]
