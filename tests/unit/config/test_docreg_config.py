"""Tests for Config loading from defaults, environment and YAML."""

import logging
from pathlib import Path

import pytest

from docreg.config import Config, LoggingConfig, StorageConfig, configure_logging


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Isolate from the developer's environment and any .env in the cwd."""
    for var in (
        "DOCREG_CONFIG_FILE",
        "DOCREG_LOG_FILE",
        "DOCREG_STORAGE__PATH",
        "DOCREG_LOGGING__LEVEL",
    ):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield root
    for handler in root.handlers[:]:
        root.removeHandler(handler)
        if handler not in handlers:
            handler.close()
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)


class TestDefaults:
    def test_storage_path_expands_home(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("HOME", "/test/home")

        config = Config()

        assert config.storage.root == Path("/test/home/.local/share/docreg/documents")

    def test_logging_defaults(self) -> None:
        config = Config()

        assert config.logging.level == "INFO"
        assert config.logging.file is None


class TestEnvironment:
    def test_nested_storage_path(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DOCREG_STORAGE__PATH", "/srv/docs")

        assert Config().storage.root == Path("/srv/docs")

    def test_log_file(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DOCREG_LOG_FILE", "/var/log/docreg.log")

        assert LoggingConfig().file == "/var/log/docreg.log"

    def test_unrelated_variables_are_ignored(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DOCREG_SOMETHING_ELSE", "x")

        Config()


class TestYaml:
    def test_loads_sections(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        config_file = tmp_path / "docreg.yaml"
        config_file.write_text("storage:\n  path: /data/docs\nlogging:\n  level: DEBUG\n")
        monkeypatch.setenv("DOCREG_CONFIG_FILE", str(config_file))

        config = Config()

        assert config.storage.root == Path("/data/docs")
        assert config.logging.level == "DEBUG"

    def test_environment_beats_yaml(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        config_file = tmp_path / "docreg.yaml"
        config_file.write_text("storage:\n  path: /data/docs\n")
        monkeypatch.setenv("DOCREG_CONFIG_FILE", str(config_file))
        monkeypatch.setenv("DOCREG_STORAGE__PATH", "/srv/docs")

        assert Config().storage.root == Path("/srv/docs")

    def test_init_beats_everything(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        monkeypatch.setenv("DOCREG_STORAGE__PATH", "/srv/docs")

        config = Config(storage=StorageConfig(path=tmp_path))

        assert config.storage.root == tmp_path

    def test_missing_file_falls_back_to_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DOCREG_CONFIG_FILE", "/does/not/exist.yaml")

        assert Config().logging.level == "INFO"

    def test_empty_file(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        config_file = tmp_path / "empty.yaml"
        config_file.write_text("")
        monkeypatch.setenv("DOCREG_CONFIG_FILE", str(config_file))

        assert Config().logging.level == "INFO"


class TestConfigureLogging:
    def test_writes_to_log_file(
        self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path, restore_root_logger
    ) -> None:
        log_file = tmp_path / "logs" / "docreg.log"
        monkeypatch.setenv("DOCREG_LOG_FILE", str(log_file))

        configure_logging(LoggingConfig(level="DEBUG"))
        logging.getLogger("docreg.test").info("hello from test")
        for handler in restore_root_logger.handlers:
            handler.flush()

        assert "hello from test" in log_file.read_text()

    def test_quiets_third_party_loggers(self, restore_root_logger) -> None:
        configure_logging(LoggingConfig())

        assert logging.getLogger("httpx").level == logging.WARNING
        assert restore_root_logger.level == logging.INFO
