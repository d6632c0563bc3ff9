"""Pydantic models for backup job configuration."""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from db_dumper.exceptions import ConfigurationError


# ============================================================================
# Engine
# ============================================================================


class Engine(str, Enum):
    """Database engines with a dump/restore command dialect."""

    MYSQL = "mysql"
    POSTGRESQL = "postgresql"
    MONGODB = "mongodb"

    @classmethod
    def parse(cls, value: "Engine | str") -> "Engine":
        """Resolve an engine from its name or a known alias (case-insensitive).

        Raises:
            ConfigurationError: If the value names no supported engine.
        """
        if isinstance(value, cls):
            return value
        key = str(value).strip().lower()
        try:
            return _ENGINE_ALIASES[key]
        except KeyError:
            raise ConfigurationError(
                f"Unknown engine '{value}'. "
                f"Available: {', '.join(e.value for e in cls)}"
            ) from None


_ENGINE_ALIASES = {
    "mysql": Engine.MYSQL,
    "mariadb": Engine.MYSQL,
    "mysqldumper": Engine.MYSQL,
    "postgresql": Engine.POSTGRESQL,
    "postgres": Engine.POSTGRESQL,
    "pgsql": Engine.POSTGRESQL,
    "pgsqldumper": Engine.POSTGRESQL,
    "mongodb": Engine.MONGODB,
    "mongo": Engine.MONGODB,
    "mongodumper": Engine.MONGODB,
}


# ============================================================================
# Backup job
# ============================================================================


def _normalize_names(value: Any) -> Any:
    """Accept a comma string or any iterable of names; drop blanks and duplicates.

    Sets have no order of their own, so their names are sorted.
    """
    if value is None:
        return ()
    if isinstance(value, str):
        value = value.split(",")
    if isinstance(value, (set, frozenset)):
        value = sorted(str(item) for item in value)
    elif not isinstance(value, (list, tuple)):
        return value
    names = (str(item).strip() for item in value)
    return tuple(dict.fromkeys(name for name in names if name))


class BackupConfig(BaseModel):
    """Options for one backup or restore job.

    Immutable once built. Options may be given in snake_case or in the
    camelCase spelling of the option map (``dbName``, ``ignoreTables``).
    Unknown options are rejected.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        alias_generator=to_camel,
        populate_by_name=True,
    )

    engine: Engine

    # Connection
    host: str = ""
    port: str = ""
    socket: str = ""
    username: str = ""
    credential_source: str = ""    # credentials file, written by the caller
    db_name: str = ""

    # Selection
    tables: tuple[str, ...] = ()
    ignore_tables: tuple[str, ...] = ()
    create_tables: bool = True     # False = data only

    # Locations
    destination_path: str = ""
    restore_path: str = ""
    dump_binary_path: str = ""     # directory prefix for the vendor binaries

    # Compression
    is_compress: bool = False
    compress_binary_path: str = ""
    compress_command: str = "gzip"
    compress_extension: str = ".gz"

    # MySQL
    single_transaction: bool = False
    skip_lock_tables: bool = False
    quick: bool = False
    skip_comments: bool = False
    default_character_set: str = ""

    # PostgreSQL
    use_inserts: bool = False

    # MongoDB
    uri: str = ""
    collection: str = ""
    authentication_database: str = ""

    # Execution
    timeout: float | None = 60.0
    debug: bool = False

    @field_validator("engine", mode="before")
    @classmethod
    def _parse_engine(cls, value: Any) -> Engine:
        return Engine.parse(value)

    @field_validator("port", mode="before")
    @classmethod
    def _stringify_port(cls, value: Any) -> Any:
        if value is None:
            return ""
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value

    @field_validator("tables", "ignore_tables", mode="before")
    @classmethod
    def _normalize_tables(cls, value: Any) -> Any:
        return _normalize_names(value)

    @field_validator("timeout")
    @classmethod
    def _check_timeout(cls, value: float | None) -> float | None:
        if value is not None and value <= 0:
            raise ValueError("timeout must be positive (or null to disable)")
        return value


# ============================================================================
# Job file
# ============================================================================


class DumperConfig(BaseModel):
    """Complete job configuration from dumper.toml."""

    jobs: dict[str, BackupConfig] = Field(default_factory=dict)
    default_job: str | None = None
