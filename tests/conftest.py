"""Shared fixtures for routinely tests."""

import os

os.environ.setdefault("ROUTINELY_USER_ID", "test-user")
os.environ.setdefault("ROUTINELY_TIMEZONE", "UTC")
os.environ.setdefault("ROUTINELY_USER_NAME", "Tester")

import pytest


@pytest.fixture()
def data_dir(tmp_path, monkeypatch):
    """Redirect all data file paths to a temp directory."""
    import routinely.storage as storage_mod
    import routinely.tracking.routines as routines_mod

    monkeypatch.setattr(storage_mod, "DATA_DIR", tmp_path)
    monkeypatch.setattr(routines_mod, "USERS_DIR", tmp_path / "users")
    return tmp_path
