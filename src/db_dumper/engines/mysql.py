"""MySQL / MariaDB: mysqldump and mysql.

Host, port, user and password come from the credentials file passed with
``--defaults-extra-file``; the command line only carries the socket.
"""

from db_dumper.commands import fragments
from db_dumper.commands.assembler import join_fragments, quote_arg, quote_path
from db_dumper.config.models import BackupConfig, Engine
from db_dumper.engines.base import EngineStrategy


def _defaults_file(credential_file: str) -> str:
    # mysql clients require this to be the first option
    return f"--defaults-extra-file={quote_path(credential_file)}" if credential_file else ""


def _dump_options(config: BackupConfig) -> str:
    return join_fragments(
        "--single-transaction" if config.single_transaction else "",
        "--skip-lock-tables" if config.skip_lock_tables else "",
        "--quick" if config.quick else "",
        "--skip-comments" if config.skip_comments else "",
        (
            f"--default-character-set={quote_arg(config.default_character_set)}"
            if config.default_character_set
            else ""
        ),
    )


class MySqlStrategy(EngineStrategy):
    engine = Engine.MYSQL
    dump_binary = "mysqldump"
    restore_binary = "mysql"

    def prepare_dump_command(
        self, config: BackupConfig, credential_file: str, destination_path: str
    ) -> str:
        command = " ".join(
            [
                self.binary(config, self.dump_binary),
                _defaults_file(credential_file),
                fragments.prepare_socket(config),
                _dump_options(config),
                fragments.prepare_include_tables(config),
                fragments.prepare_ignore_tables(config),
                fragments.prepare_create_tables(config),
                fragments.prepare_database(config),
            ]
        )
        return self.redirect_output(config, command, destination_path)

    def prepare_restore_command(
        self, config: BackupConfig, credential_file: str, file_path: str
    ) -> str:
        command = " ".join(
            [
                self.binary(config, self.restore_binary),
                _defaults_file(credential_file),
                fragments.prepare_socket(config),
                fragments.prepare_database(config),
            ]
        )
        return self.pipe_input(config, command, file_path)
