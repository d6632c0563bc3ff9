"""PostgreSQL: pg_dump and psql.

The password is read from a pgpass-format file named by ``PGPASSFILE``.
"""

from db_dumper.commands import fragments
from db_dumper.commands.assembler import quote_path
from db_dumper.config.models import BackupConfig, Engine
from db_dumper.engines.base import EngineStrategy, flag


def _passfile(credential_file: str) -> str:
    return f"PGPASSFILE={quote_path(credential_file)}" if credential_file else ""


class PostgresStrategy(EngineStrategy):
    engine = Engine.POSTGRESQL
    dump_binary = "pg_dump"
    restore_binary = "psql"

    def _connection(self, config: BackupConfig) -> list[str]:
        return [
            flag("-U", fragments.prepare_user_name(config)),
            flag("-h", fragments.prepare_host(config)),
            fragments.prepare_port(config),
        ]

    def prepare_dump_command(
        self, config: BackupConfig, credential_file: str, destination_path: str
    ) -> str:
        command = " ".join(
            [
                _passfile(credential_file),
                self.binary(config, self.dump_binary),
                *self._connection(config),
                fragments.prepare_create_tables(config),
                "--inserts" if config.use_inserts else "",
                fragments.prepare_database(config),
                fragments.prepare_include_tables(config),
                fragments.prepare_ignore_tables(config),
            ]
        )
        return self.redirect_output(config, command, destination_path)

    def prepare_restore_command(
        self, config: BackupConfig, credential_file: str, file_path: str
    ) -> str:
        command = " ".join(
            [
                _passfile(credential_file),
                self.binary(config, self.restore_binary),
                *self._connection(config),
                fragments.prepare_database(config),
            ]
        )
        return self.pipe_input(config, command, file_path)
