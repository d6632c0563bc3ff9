"""MongoDB: mongodump and mongorestore in archive mode.

Compression uses the tools' own ``--gzip`` switch instead of an external
compressor. The password belongs in a YAML file passed with ``--config``.
A ``uri`` option replaces the individual connection flags.
"""

from db_dumper.commands import fragments
from db_dumper.commands.assembler import join_fragments, quote_arg, quote_path
from db_dumper.config.models import BackupConfig, Engine
from db_dumper.engines.base import EngineStrategy, flag


def _config_file(credential_file: str) -> str:
    return f"--config={quote_path(credential_file)}" if credential_file else ""


def _uri(config: BackupConfig) -> str:
    return f"--uri {quote_path(config.uri)}"


class MongoStrategy(EngineStrategy):
    engine = Engine.MONGODB
    dump_binary = "mongodump"
    restore_binary = "mongorestore"
    requires_database = False

    def prepare_dump_command(
        self, config: BackupConfig, credential_file: str, destination_path: str
    ) -> str:
        if config.uri:
            connection = _uri(config)
        else:
            connection = join_fragments(
                fragments.prepare_database(config),
                fragments.prepare_user_name(config),
                fragments.prepare_host(config),
                fragments.prepare_port(config),
            )
        command = " ".join(
            [
                self.binary(config, self.dump_binary),
                _config_file(credential_file),
                connection,
                flag("--collection", quote_arg(config.collection)),
                flag("--authenticationDatabase", quote_arg(config.authentication_database)),
                "--archive",
                "--gzip" if config.is_compress else "",
            ]
        )
        output = quote_path(self.dump_output_path(config, destination_path))
        return f"{command} > {output}"

    def prepare_restore_command(
        self, config: BackupConfig, credential_file: str, file_path: str
    ) -> str:
        if config.uri:
            connection = _uri(config)
        else:
            connection = join_fragments(
                fragments.prepare_user_name(config),
                fragments.prepare_host(config),
                fragments.prepare_port(config),
            )
        command = " ".join(
            [
                self.binary(config, self.restore_binary),
                _config_file(credential_file),
                connection,
                flag("--authenticationDatabase", quote_arg(config.authentication_database)),
                "--gzip" if config.is_compress else "",
                "--archive",
            ]
        )
        return f"{command} < {quote_path(file_path)}"
