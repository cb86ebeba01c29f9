import logging

import pytest

from errchain.db import configure_logging, get_db_path


@pytest.fixture()
def _restore_level():
    logger = logging.getLogger("errchain")
    old = logger.level
    yield logger
    logger.setLevel(old)


def test_log_level_by_name(_restore_level):
    configure_logging("debug")
    assert _restore_level.level == logging.DEBUG


@pytest.mark.parametrize("bad", ["BASIC_FORMAT", "getLogger", "NOPE"])
def test_log_level_non_level_names_fall_back_to_info(_restore_level, bad):
    configure_logging(bad)
    assert _restore_level.level == logging.INFO


def test_log_level_from_config_yaml(_restore_level, tmp_path, monkeypatch):
    cfg = tmp_path / "config.yaml"
    cfg.write_text("log_level: WARNING\n", encoding="utf-8")
    monkeypatch.setenv("ERRCHAIN_CONFIG", str(cfg))
    configure_logging()
    assert _restore_level.level == logging.WARNING


def test_db_path_env_wins(tmp_path, monkeypatch):
    target = tmp_path / "sub" / "ops.db"
    monkeypatch.setenv("ERRCHAIN_DB_PATH", str(target))
    assert get_db_path() == str(target)
    assert target.parent.is_dir()


def test_db_path_test_config(tmp_path, monkeypatch):
    cfg = tmp_path / "config.yaml"
    cfg.write_text(f"db_path: {tmp_path / 'prod.db'}\ntest_db_path: {tmp_path / 'test.db'}\n", encoding="utf-8")
    monkeypatch.setenv("ERRCHAIN_CONFIG", str(cfg))
    monkeypatch.delenv("ERRCHAIN_DB_PATH")
    assert get_db_path() == str(tmp_path / "test.db")
