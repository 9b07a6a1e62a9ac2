import pytest

import config
import main
from db import database

_ENV_OVERRIDES = (
    "WEAK_INTERVAL_HOURS",
    "MEDIUM_INTERVAL_HOURS",
    "STRONG_INTERVAL_HOURS",
    "RECALLCOACH_HOST",
    "RECALLCOACH_PORT",
    "RECALLCOACH_LOG_LEVEL",
)


@pytest.fixture
def config_dir(tmp_path, monkeypatch):
    config_dir = tmp_path / ".recallcoach"
    config_dir.mkdir()
    monkeypatch.setattr(config, "CONFIG_DIR", config_dir)
    monkeypatch.setattr(config, "CONFIG_PATH", config_dir / "config.toml")
    monkeypatch.setattr(database, "CONFIG_DIR", config_dir)
    monkeypatch.setattr(database, "DB_PATH", config_dir / "recallcoach.db")
    for name in _ENV_OVERRIDES:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr(main.app.state, "intervals", None, raising=False)
    return config_dir


@pytest.fixture
def conn(config_dir):
    database.init_db()
    with database.get_conn() as conn:
        yield conn
