"""Tests for config module."""

import importlib

import dotenv
import pytest

import routinely.config as config_mod


def test_missing_user_id_exits(monkeypatch):
    monkeypatch.delenv("ROUTINELY_USER_ID", raising=False)
    monkeypatch.setattr(dotenv, "load_dotenv", lambda: None)

    with pytest.raises(SystemExit):
        importlib.reload(config_mod)


def test_valid_config_loads(monkeypatch):
    monkeypatch.setenv("ROUTINELY_USER_ID", "alice")
    monkeypatch.delenv("ROUTINELY_USER_NAME", raising=False)
    monkeypatch.setenv("ROUTINELY_TIMEZONE", "Asia/Seoul")

    importlib.reload(config_mod)
    assert config_mod.USER_ID == "alice"
    assert config_mod.USER_NAME == "alice"
    assert config_mod.TZ.key == "Asia/Seoul"


def test_log_level_is_uppercased(monkeypatch):
    monkeypatch.setenv("ROUTINELY_USER_ID", "alice")
    monkeypatch.setenv("ROUTINELY_LOG_LEVEL", "debug")

    importlib.reload(config_mod)
    assert config_mod.LOG_LEVEL == "DEBUG"


@pytest.fixture(autouse=True)
def _restore_config():
    yield
    importlib.reload(config_mod)


def test_unknown_timezone_exits(monkeypatch, capsys):
    monkeypatch.setenv("ROUTINELY_USER_ID", "alice")
    monkeypatch.setenv("ROUTINELY_TIMEZONE", "Mars/Olympus_Mons")

    with pytest.raises(SystemExit):
        importlib.reload(config_mod)

    assert "Unknown timezone" in capsys.readouterr().err


def test_user_name_from_env(monkeypatch):
    monkeypatch.setenv("ROUTINELY_USER_ID", "alice")
    monkeypatch.setenv("ROUTINELY_USER_NAME", "Alice Kim")

    importlib.reload(config_mod)
    assert config_mod.USER_NAME == "Alice Kim"
