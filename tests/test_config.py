"""Tests for BackupConfig validation and dumper.toml loading."""

import textwrap
from pathlib import Path

import pytest
from pydantic import ValidationError

from db_dumper.config.loader import CONFIG_PATH_ENV, default_config_path, load_dumper_config
from db_dumper.config.models import BackupConfig, DumperConfig, Engine
from db_dumper.exceptions import ConfigurationError


class TestEngine:
    """Engine.parse() names and aliases."""

    @pytest.mark.parametrize(
        "value, expected",
        [
            ("mysql", Engine.MYSQL),
            ("MariaDB", Engine.MYSQL),
            ("MySqlDumper", Engine.MYSQL),
            ("postgresql", Engine.POSTGRESQL),
            ("postgres", Engine.POSTGRESQL),
            ("pgsql", Engine.POSTGRESQL),
            ("PgsqlDumper", Engine.POSTGRESQL),
            ("mongodb", Engine.MONGODB),
            (" mongo ", Engine.MONGODB),
            (Engine.MONGODB, Engine.MONGODB),
        ],
    )
    def test_parse(self, value, expected: Engine) -> None:
        assert Engine.parse(value) is expected

    def test_unknown(self) -> None:
        with pytest.raises(ConfigurationError, match="Unknown engine 'sqlite'"):
            Engine.parse("sqlite")


class TestBackupConfig:
    """Field defaults, normalisation and strictness."""

    def test_defaults(self) -> None:
        config = BackupConfig(engine="mysql")
        assert config.host == ""
        assert config.port == ""
        assert config.tables == ()
        assert config.ignore_tables == ()
        assert config.create_tables is True
        assert config.timeout == 60.0
        assert config.debug is False
        assert config.is_compress is False
        assert config.compress_command == "gzip"
        assert config.compress_extension == ".gz"

    def test_camel_case_keys(self) -> None:
        config = BackupConfig.model_validate(
            {
                "engine": "mysql",
                "dbName": "shop",
                "ignoreTables": ["logs"],
                "createTables": False,
                "credentialSource": "/etc/my.cnf",
                "destinationPath": "shop.sql",
            }
        )
        assert config.db_name == "shop"
        assert config.ignore_tables == ("logs",)
        assert config.create_tables is False
        assert config.credential_source == "/etc/my.cnf"
        assert config.destination_path == "shop.sql"

    def test_unknown_key_rejected(self) -> None:
        with pytest.raises(ValidationError, match="not_an_option"):
            BackupConfig.model_validate({"engine": "mysql", "not_an_option": 1})

    def test_engine_required(self) -> None:
        with pytest.raises(ValidationError):
            BackupConfig.model_validate({"db_name": "shop"})

    def test_frozen(self) -> None:
        config = BackupConfig(engine="mysql", db_name="shop")
        with pytest.raises(ValidationError):
            config.db_name = "other"

    def test_port_int_stringified(self) -> None:
        assert BackupConfig(engine="postgresql", port=5432).port == "5432"

    def test_tables_deduplicated_in_order(self) -> None:
        config = BackupConfig(engine="mysql", tables=["orders", "users", "orders", " "])
        assert config.tables == ("orders", "users")

    def test_tables_from_comma_string(self) -> None:
        config = BackupConfig(engine="postgresql", ignore_tables="logs, sessions,,logs")
        assert config.ignore_tables == ("logs", "sessions")

    @pytest.mark.parametrize("kind", [set, frozenset])
    def test_tables_from_set_sorted(self, kind) -> None:
        """Set input gives the same command on every run."""
        config = BackupConfig(engine="mysql", tables=kind(["users", "orders", "audit"]))
        assert config.tables == ("audit", "orders", "users")

    def test_tables_none(self) -> None:
        assert BackupConfig(engine="mysql", tables=None).tables == ()

    @pytest.mark.parametrize("timeout", [0, -5])
    def test_timeout_must_be_positive(self, timeout: float) -> None:
        with pytest.raises(ValidationError, match="timeout"):
            BackupConfig(engine="mysql", timeout=timeout)

    def test_timeout_disabled(self) -> None:
        assert BackupConfig(engine="mysql", timeout=None).timeout is None


class TestLoadDumperConfig:
    """load_dumper_config() TOML parsing."""

    def test_load_valid_toml(self, tmp_path: Path) -> None:
        toml_content = textwrap.dedent("""\
            [settings]
            default_job = "shop"

            [jobs.shop]
            engine = "mysql"
            db_name = "shop"
            tables = ["orders", "users"]
            create_tables = false
            destination_path = "/backups/shop.sql"

            [jobs.analytics]
            engine = "postgres"
            host = "db.internal"
            port = 5433
            dbName = "analytics"
            ignoreTables = ["logs"]
        """)
        config_file = tmp_path / "dumper.toml"
        config_file.write_text(toml_content)

        config = load_dumper_config(config_path=config_file)

        assert isinstance(config, DumperConfig)
        assert config.default_job == "shop"
        assert list(config.jobs) == ["shop", "analytics"]

        shop = config.jobs["shop"]
        assert shop.engine is Engine.MYSQL
        assert shop.tables == ("orders", "users")
        assert shop.create_tables is False

        analytics = config.jobs["analytics"]
        assert analytics.engine is Engine.POSTGRESQL
        assert analytics.port == "5433"
        assert analytics.db_name == "analytics"
        assert analytics.ignore_tables == ("logs",)

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError, match="Dumper config not found"):
            load_dumper_config(config_path=tmp_path / "missing.toml")

    def test_empty_file(self, tmp_path: Path) -> None:
        config_file = tmp_path / "dumper.toml"
        config_file.write_text("")
        config = load_dumper_config(config_path=config_file)
        assert config.jobs == {}
        assert config.default_job is None

    def test_invalid_toml(self, tmp_path: Path) -> None:
        config_file = tmp_path / "dumper.toml"
        config_file.write_text("[jobs.shop\nengine = ")
        with pytest.raises(ConfigurationError, match="Invalid TOML"):
            load_dumper_config(config_path=config_file)

    def test_invalid_job_named(self, tmp_path: Path) -> None:
        config_file = tmp_path / "dumper.toml"
        config_file.write_text('[jobs.broken]\nengine = "oracle"\n')
        with pytest.raises(ConfigurationError, match="Invalid job 'broken'"):
            load_dumper_config(config_path=config_file)

    def test_unknown_option_in_job(self, tmp_path: Path) -> None:
        config_file = tmp_path / "dumper.toml"
        config_file.write_text('[jobs.shop]\nengine = "mysql"\npasword = "typo"\n')
        with pytest.raises(ConfigurationError, match="pasword"):
            load_dumper_config(config_path=config_file)

    def test_unknown_default_job(self, tmp_path: Path) -> None:
        config_file = tmp_path / "dumper.toml"
        config_file.write_text(
            '[settings]\ndefault_job = "nope"\n\n[jobs.shop]\nengine = "mysql"\n'
        )
        with pytest.raises(ConfigurationError, match="default_job 'nope'"):
            load_dumper_config(config_path=config_file)

    def test_env_var_path(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        config_file = tmp_path / "custom.toml"
        config_file.write_text('[jobs.shop]\nengine = "mongodb"\n')
        monkeypatch.setenv(CONFIG_PATH_ENV, str(config_file))

        assert default_config_path() == config_file
        assert load_dumper_config().jobs["shop"].engine is Engine.MONGODB

    def test_default_path_in_cwd(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.delenv(CONFIG_PATH_ENV, raising=False)
        monkeypatch.chdir(tmp_path)
        assert default_config_path() == Path.cwd() / "dumper.toml"
