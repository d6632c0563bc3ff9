"""Engine strategy interface.

An ``EngineStrategy`` turns a ``BackupConfig`` into the dump and restore
command lines of one database engine. Strategies are stateless; one
instance per engine is shared through ``db_dumper.engines.get_strategy``.
"""

import os
from abc import ABC, abstractmethod

from db_dumper.commands.assembler import quote_path
from db_dumper.config.models import BackupConfig, Engine


class EngineStrategy(ABC):
    """Dump/restore command templates for one engine."""

    engine: Engine
    dump_binary: str
    restore_binary: str
    requires_database: bool = True   # False when the tool can dump every database

    @abstractmethod
    def prepare_dump_command(
        self, config: BackupConfig, credential_file: str, destination_path: str
    ) -> str:
        """Return the raw (unnormalised) dump command line."""
        ...

    @abstractmethod
    def prepare_restore_command(
        self, config: BackupConfig, credential_file: str, file_path: str
    ) -> str:
        """Return the raw (unnormalised) restore command line."""
        ...

    def dump_output_path(self, config: BackupConfig, destination_path: str) -> str:
        """Path of the file a dump to ``destination_path`` actually produces."""
        if config.is_compress:
            return f"{destination_path}{config.compress_extension}"
        return destination_path

    # ------------------------------------------------------------------
    # Helpers shared by the templates
    # ------------------------------------------------------------------

    def binary(self, config: BackupConfig, name: str) -> str:
        """Vendor binary, prefixed with ``dump_binary_path`` when set."""
        if config.dump_binary_path:
            return quote_path(os.path.join(config.dump_binary_path, name))
        return name

    def compressor(self, config: BackupConfig) -> str:
        if config.compress_binary_path:
            return quote_path(
                os.path.join(config.compress_binary_path, config.compress_command)
            )
        return quote_path(config.compress_command)

    def redirect_output(
        self, config: BackupConfig, command: str, destination_path: str
    ) -> str:
        """Send the dump to the destination, through the compressor if enabled."""
        output = quote_path(self.dump_output_path(config, destination_path))
        if config.is_compress:
            return f"{command} | {self.compressor(config)} > {output}"
        return f"{command} > {output}"

    def pipe_input(self, config: BackupConfig, command: str, file_path: str) -> str:
        """Feed the restore file to the client, decompressing it if enabled."""
        source = quote_path(file_path)
        if config.is_compress:
            return f"{self.compressor(config)} -d < {source} | {command}"
        return f"{command} < {source}"


def flag(name: str, value: str) -> str:
    """``"<name> <value>"`` when value is non-empty, else ``""``."""
    return f"{name} {value}" if value else ""
