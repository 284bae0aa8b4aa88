"""Pytest configuration and fixtures for CLI tests."""

import pytest
from click.testing import CliRunner


@pytest.fixture
def data_dir(tmp_path):
    """Directory holding the notes snapshot."""
    return tmp_path / "notes-data"


@pytest.fixture
def cli_runner(data_dir):
    """Click CLI test runner bound to a temporary data directory."""

    class DevNotesCliRunner(CliRunner):
        def invoke(self, args, **kwargs):  # type: ignore
            """Invoke the devnotes CLI with an isolated data directory."""
            from devnotes.cli.main import cli

            full_args = ["--no-color", "--data-dir", str(data_dir), *args]
            return super().invoke(cli, full_args, **kwargs)

    return DevNotesCliRunner()


@pytest.fixture
def mock_config_file(tmp_path):
    """Config file with a default author."""
    path = tmp_path / "config.yaml"
    path.write_text("default_author: Config Author\n")
    return path
