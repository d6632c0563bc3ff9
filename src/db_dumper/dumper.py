"""Dumper: one backup/restore job for one database engine.

A ``Dumper`` pairs an immutable ``BackupConfig`` with the ``EngineStrategy``
of its engine. It exposes the per-engine fragment builders, assembles the
full dump/restore command lines and runs them through the shell.

Usage:
    from db_dumper import Dumper

    dumper = Dumper.create(
        "mysql",
        db_name="shop",
        tables=["orders", "users"],
        create_tables=False,
        destination_path="/backups/shop.sql",
    )
    dumper.get_dump_command("/run/secrets/my.cnf")
    # 'mysqldump --defaults-extra-file=/run/secrets/my.cnf --tables orders users
    #  --no-create-info shop > /backups/shop.sql'
    dumper.dump("/run/secrets/my.cnf")
"""

import logging
import subprocess
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from db_dumper.commands import fragments
from db_dumper.commands.assembler import remove_extra_spaces
from db_dumper.config.models import BackupConfig, Engine
from db_dumper.engines import EngineStrategy, get_strategy
from db_dumper.exceptions import ConfigurationError
from db_dumper.process import run_shell_command

logger = logging.getLogger(__name__)


class Dumper:
    """Build and run dump/restore commands for one configured job."""

    def __init__(self, config: BackupConfig) -> None:
        self.config = config
        self.strategy: EngineStrategy = get_strategy(config.engine)

    @classmethod
    def create(cls, engine: Engine | str, **options: Any) -> "Dumper":
        """Build a dumper from an engine name and an options map.

        Options use the ``BackupConfig`` field names (snake_case or camelCase).

        Raises:
            ConfigurationError: If the engine is unknown or an option is
                unknown or has an invalid value.
        """
        return cls.from_options({**options, "engine": engine})

    @classmethod
    def from_options(cls, options: dict[str, Any]) -> "Dumper":
        """Build a dumper from an options map that includes ``engine``."""
        try:
            config = BackupConfig.model_validate(options)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid backup options: {e}") from e
        return cls(config)

    @property
    def engine(self) -> Engine:
        return self.config.engine

    def get_dumper_class_name(self) -> str:
        """Engine token used for dispatch (``mysql``, ``postgresql``, ``mongodb``)."""
        return self.engine.value

    # ------------------------------------------------------------------
    # Fragment builders
    # ------------------------------------------------------------------

    def prepare_host(self) -> str:
        return fragments.prepare_host(self.config)

    def prepare_port(self) -> str:
        return fragments.prepare_port(self.config)

    def prepare_socket(self) -> str:
        return fragments.prepare_socket(self.config)

    def prepare_database(self) -> str:
        return fragments.prepare_database(self.config)

    def prepare_user_name(self) -> str:
        return fragments.prepare_user_name(self.config)

    def prepare_include_tables(self) -> str:
        return fragments.prepare_include_tables(self.config)

    def prepare_ignore_tables(self) -> str:
        return fragments.prepare_ignore_tables(self.config)

    def prepare_create_tables(self) -> str:
        return fragments.prepare_create_tables(self.config)

    # ------------------------------------------------------------------
    # Command assembly
    # ------------------------------------------------------------------

    def missing_fields(self, *paths: tuple[str, str]) -> list[str]:
        """Names of required options that are empty for this job.

        Args:
            *paths: ``(option name, resolved value)`` pairs for the file paths
                the operation needs.
        """
        missing = []
        if self.strategy.requires_database and not self.config.db_name:
            missing.append("db_name")
        missing.extend(name for name, value in paths if not value)
        return missing

    def _warn_if_incomplete(self, operation: str, *paths: tuple[str, str]) -> None:
        missing = self.missing_fields(*paths)
        if missing:
            logger.warning(
                "%s command for %s is incomplete, missing: %s",
                operation,
                self.engine.value,
                ", ".join(missing),
            )

    def get_dump_command(self, credential_file: str = "", destination_path: str = "") -> str:
        """Assemble the dump command line.

        Args:
            credential_file: Credentials file for the client tool
                (default: ``config.credential_source``).
            destination_path: Dump output file
                (default: ``config.destination_path``).

        Returns:
            Command line with whitespace normalised. Missing required options
            produce a partial command and a warning, never an error.
        """
        credential_file = credential_file or self.config.credential_source
        destination_path = destination_path or self.config.destination_path
        self._warn_if_incomplete("Dump", ("destination_path", destination_path))
        command = self.strategy.prepare_dump_command(
            self.config, credential_file, destination_path
        )
        return remove_extra_spaces(command)

    def get_restore_command(self, credential_file: str = "", file_path: str = "") -> str:
        """Assemble the restore command line.

        Args:
            credential_file: Credentials file for the client tool
                (default: ``config.credential_source``).
            file_path: Dump file to restore (default: ``config.restore_path``).
        """
        credential_file = credential_file or self.config.credential_source
        file_path = file_path or self.config.restore_path
        self._warn_if_incomplete("Restore", ("restore_path", file_path))
        command = self.strategy.prepare_restore_command(
            self.config, credential_file, file_path
        )
        return remove_extra_spaces(command)

    # ------------------------------------------------------------------
    # Execution
    # ------------------------------------------------------------------

    def run(self, command: str) -> subprocess.CompletedProcess | None:
        """Run an assembled command with this job's timeout and debug policy."""
        return run_shell_command(
            command,
            timeout=self.config.timeout,
            debug=self.config.debug,
            secrets=[self.config.uri],  # connection URIs may embed a password
        )

    def _require(self, operation: str, *paths: tuple[str, str]) -> None:
        missing = self.missing_fields(*paths)
        if missing:
            raise ConfigurationError(
                f"Cannot {operation} {self.engine.value} job, missing: {', '.join(missing)}"
            )

    def dump(self, credential_file: str = "", destination_path: str = "") -> Path:
        """Dump the database to a file.

        Returns:
            Path of the produced file (with the compression extension when
            compression is enabled).

        Raises:
            ConfigurationError: If the database name or destination is missing.
            ProcessFailedError: If the dump fails in debug mode.
        """
        destination_path = destination_path or self.config.destination_path
        self._require("dump", ("destination_path", destination_path))
        command = self.get_dump_command(credential_file, destination_path)
        logger.info("Dumping %s database '%s'", self.engine.value, self.config.db_name)
        self.run(command)
        return Path(self.strategy.dump_output_path(self.config, destination_path))

    def restore(self, credential_file: str = "", file_path: str = "") -> None:
        """Restore the database from a dump file.

        Raises:
            ConfigurationError: If the database name or restore file is missing.
            ProcessFailedError: If the restore fails in debug mode.
        """
        file_path = file_path or self.config.restore_path
        self._require("restore", ("restore_path", file_path))
        command = self.get_restore_command(credential_file, file_path)
        logger.info(
            "Restoring %s database '%s' from %s",
            self.engine.value,
            self.config.db_name,
            file_path,
        )
        self.run(command)
