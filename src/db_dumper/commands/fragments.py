"""Per-engine command-line fragments.

Each builder maps one uniform option of a ``BackupConfig`` onto the flag
syntax of the configured engine and returns ``""`` when the option does not
apply (empty value, or an engine that has no such flag). Values are
shell-quoted; plain names pass through unchanged. Every builder
names all three engines explicitly; anything else raises
``UnsupportedEngineError``.

Usage:
    from db_dumper.commands.fragments import prepare_include_tables

    config = BackupConfig(engine="postgresql", tables=["a", "b"])
    prepare_include_tables(config)   # '-t a -t b'
"""

from db_dumper.commands.assembler import quote_arg
from db_dumper.config.models import BackupConfig, Engine
from db_dumper.exceptions import UnsupportedEngineError


def prepare_host(config: BackupConfig) -> str:
    """Host fragment.

    PostgreSQL returns the quoted socket directory (preferred) or host, for the
    engine template to place after ``-h``. MySQL reads the host from the
    credentials file.
    """
    engine = config.engine
    if engine is Engine.POSTGRESQL:
        return quote_arg(config.socket if config.socket != "" else config.host)
    if engine is Engine.MONGODB:
        return f"--host {quote_arg(config.host)}" if config.host else ""
    if engine is Engine.MYSQL:
        return ""
    raise UnsupportedEngineError(engine)


def prepare_port(config: BackupConfig) -> str:
    engine = config.engine
    if engine is Engine.POSTGRESQL:
        return f"-p {quote_arg(config.port)}" if config.port else ""
    if engine is Engine.MONGODB:
        return f"--port {quote_arg(config.port)}" if config.port else ""
    if engine is Engine.MYSQL:
        return ""
    raise UnsupportedEngineError(engine)


def prepare_socket(config: BackupConfig) -> str:
    engine = config.engine
    if engine is Engine.MYSQL:
        return f"--socket={quote_arg(config.socket)}" if config.socket != "" else ""
    if engine in (Engine.POSTGRESQL, Engine.MONGODB):
        return ""
    raise UnsupportedEngineError(engine)


def prepare_database(config: BackupConfig) -> str:
    """Database fragment: positional for MySQL/PostgreSQL, ``--db`` for MongoDB."""
    engine = config.engine
    if engine in (Engine.MYSQL, Engine.POSTGRESQL):
        return quote_arg(config.db_name)
    if engine is Engine.MONGODB:
        return f"--db {quote_arg(config.db_name)}" if config.db_name else ""
    raise UnsupportedEngineError(engine)


def prepare_user_name(config: BackupConfig) -> str:
    engine = config.engine
    if engine is Engine.POSTGRESQL:
        return quote_arg(config.username)
    if engine is Engine.MONGODB:
        return f"--username {quote_arg(config.username)}" if config.username else ""
    if engine is Engine.MYSQL:
        return ""
    raise UnsupportedEngineError(engine)


def prepare_include_tables(config: BackupConfig) -> str:
    """Whitelist fragment: ``--tables a b`` (MySQL) or ``-t a -t b`` (PostgreSQL)."""
    engine = config.engine
    if engine is Engine.MYSQL:
        return "--tables " + " ".join(map(quote_arg, config.tables)) if config.tables else ""
    if engine is Engine.POSTGRESQL:
        return " ".join(f"-t {quote_arg(table)}" for table in config.tables)
    if engine is Engine.MONGODB:
        return ""
    raise UnsupportedEngineError(engine)


def prepare_ignore_tables(config: BackupConfig) -> str:
    """Blacklist fragment: one flag per ignored table.

    MySQL qualifies each table with the database name
    (``--ignore-table=shop.logs``).
    """
    engine = config.engine
    if engine is Engine.MYSQL:
        return " ".join(
            "--ignore-table=" + quote_arg(f"{config.db_name}.{table}")
            for table in config.ignore_tables
        )
    if engine is Engine.POSTGRESQL:
        return " ".join(f"-T {quote_arg(table)}" for table in config.ignore_tables)
    if engine is Engine.MONGODB:
        return ""
    raise UnsupportedEngineError(engine)


def prepare_create_tables(config: BackupConfig) -> str:
    """Data-only flag, emitted when ``create_tables`` is False."""
    engine = config.engine
    if engine is Engine.MYSQL:
        return "" if config.create_tables else "--no-create-info"
    if engine is Engine.POSTGRESQL:
        return "" if config.create_tables else "--data-only"
    if engine is Engine.MONGODB:
        return ""
    raise UnsupportedEngineError(engine)
