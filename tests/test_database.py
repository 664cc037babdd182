import json

import pytest

import shared.database as database
from shared.config import DEFAULT_DB_URL, get_section, load_config
from shared.errors import DatabaseUnavailableError


@pytest.fixture
def reset_database(monkeypatch):
    monkeypatch.setattr(database, "_async_engine", None)
    monkeypatch.setattr(database, "_session_factory", None)
    monkeypatch.setattr(database, "_unavailable", False)


def test_load_config_missing_file(tmp_path, monkeypatch):
    """配置文件不存在时返回空配置"""
    monkeypatch.delenv("DATABASE_URL", raising=False)
    assert load_config(str(tmp_path / "missing.json")) == {}


def test_load_config_env_override(tmp_path, monkeypatch):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"db_url": "sqlite+aiosqlite:///a.db", "api": {"port": 1}}))
    monkeypatch.setenv("DATABASE_URL", "sqlite+aiosqlite:///b.db")

    config = load_config(str(path))
    assert config["db_url"] == "sqlite+aiosqlite:///b.db"
    assert get_section(config, "api") == {"port": 1}
    assert get_section(config, "auth") == {}


def test_empty_db_url_marks_unavailable(reset_database):
    """数据库地址为空时之后的访问都报不可用"""
    assert database.configure_database("") is None
    with pytest.raises(DatabaseUnavailableError):
        database.get_session_factory()


def test_set_session_factory_none(reset_database):
    database.set_session_factory(None)
    with pytest.raises(DatabaseUnavailableError) as exc_info:
        database.get_session_factory()
    assert exc_info.value.status_code == 503


@pytest.mark.asyncio
async def test_configure_in_memory_database(reset_database):
    factory = database.configure_database("sqlite+aiosqlite:///:memory:")
    assert factory is not None
    assert database.get_session_factory() is factory

    await database.close_db()
    assert database._session_factory is None


def test_default_db_url_is_async_sqlite():
    assert DEFAULT_DB_URL.startswith("sqlite+aiosqlite://")
