"""Shared pytest fixtures for the log server test suite."""

import pytest

from log_server.app import create_app
from log_server.config import Config
from log_server.reader import IncrementalLogReader


@pytest.fixture
def fake_time():
    """Mutable clock: tests advance it with ``fake_time[0] += n``."""
    return [1_000_000.0]


@pytest.fixture
def reader(fake_time):
    return IncrementalLogReader(ttl_seconds=30, time_func=lambda: fake_time[0])


@pytest.fixture
def log_path(tmp_path):
    """Path to an empty log file inside a ``logs`` directory."""
    logs = tmp_path / "logs"
    logs.mkdir()
    path = logs / "games_mp.log"
    path.write_bytes(b"")
    return path


@pytest.fixture
def app(reader):
    application = create_app(Config(sweep_interval_seconds=0), reader)
    application.config["TESTING"] = True
    return application


@pytest.fixture
def client(app):
    return app.test_client()
