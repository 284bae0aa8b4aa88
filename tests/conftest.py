"""Pytest configuration and fixtures."""

import os

import pytest


@pytest.fixture(autouse=True)
def isolate_environment(monkeypatch, tmp_path):
    """Isolate environment variables for each test.

    This prevents test pollution where one test's environment
    changes affect other tests, and keeps user config out of the way.
    """
    original_env = os.environ.copy()

    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg-config"))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "xdg-data"))
    monkeypatch.delenv("DEVNOTES_DATA_DIR", raising=False)
    monkeypatch.delenv("DEVNOTES_AUTHOR", raising=False)

    yield

    os.environ.clear()
    os.environ.update(original_env)
