import logging
import os
from typing import AsyncGenerator, Optional

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlmodel import SQLModel

# 确保表被导入，以便 SQLModel.metadata.create_all 能够工作
import shared.models  # noqa: F401
from shared.config import DEFAULT_DB_URL, load_config
from shared.errors import DatabaseUnavailableError

logger = logging.getLogger(__name__)

_async_engine: Optional[AsyncEngine] = None
_session_factory: Optional[async_sessionmaker[AsyncSession]] = None
_unavailable = False


def _ensure_sqlite_dir(db_url: str) -> None:
    url = make_url(db_url)
    if not url.drivername.startswith("sqlite") or not url.database:
        return
    if url.database == ":memory:":
        return
    db_dir = os.path.dirname(url.database)
    if db_dir and not os.path.exists(db_dir):
        os.makedirs(db_dir)


def configure_database(db_url: Optional[str]) -> Optional[async_sessionmaker[AsyncSession]]:
    """
    创建进程级的引擎和会话工厂。

    db_url 为空或引擎创建失败时进入“不可用”状态，之后的数据访问都会
    抛出 DatabaseUnavailableError，不做重试。
    """
    global _async_engine, _session_factory, _unavailable

    if not db_url:
        logger.warning("未配置数据库地址，数据库不可用")
        _async_engine, _session_factory, _unavailable = None, None, True
        return None

    try:
        _ensure_sqlite_dir(db_url)
        _async_engine = create_async_engine(db_url, echo=False)
    except Exception as e:
        logger.warning(f"数据库连接失败: {e}")
        _async_engine, _session_factory, _unavailable = None, None, True
        return None

    _session_factory = async_sessionmaker(
        bind=_async_engine,
        expire_on_commit=False,
    )
    _unavailable = False
    return _session_factory


def set_session_factory(
    factory: Optional[async_sessionmaker[AsyncSession]],
) -> None:
    """直接注入会话工厂（测试或嵌入式使用）。"""
    global _session_factory, _unavailable
    _session_factory = factory
    _unavailable = factory is None


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """懒加载会话工厂，首次调用时按配置创建。"""
    if _session_factory is None and not _unavailable:
        config = load_config()
        configure_database(config.get("db_url", DEFAULT_DB_URL))

    if _session_factory is None:
        raise DatabaseUnavailableError()
    return _session_factory


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI 依赖：为每个请求提供独立的会话。"""
    factory = get_session_factory()
    async with factory() as session:
        yield session


async def init_db():
    """按模型建表。"""
    if _async_engine is None:
        get_session_factory()
    if _async_engine is None:
        raise DatabaseUnavailableError()
    async with _async_engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    logger.info("数据库表结构已就绪")


async def close_db():
    """
    关闭数据库引擎，释放连接池。
    """
    global _async_engine, _session_factory, _unavailable
    if _async_engine is None:
        return
    logger.info("正在关闭数据库连接池...")
    await _async_engine.dispose()
    _async_engine, _session_factory, _unavailable = None, None, False
    logger.info("数据库连接池已关闭。")
