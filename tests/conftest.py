import os
import sys
from typing import AsyncGenerator

import httpx
import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "../src")))

import auth.password  # noqa: E402
import shared.models  # noqa: E402,F401
from storage.storage_service import StorageService  # noqa: E402

# 使用内存数据库进行测试
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture(autouse=True)
def fast_password_hashing(monkeypatch):
    """测试中降低 PBKDF2 迭代次数"""
    monkeypatch.setattr(auth.password, "ITERATIONS", 1000)


@pytest_asyncio.fixture
async def db_session_factory() -> AsyncGenerator[
    async_sessionmaker[AsyncSession], None
]:
    """
    每个测试使用一个全新的内存数据库。
    """
    engine = create_async_engine(
        TEST_DATABASE_URL,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    factory = async_sessionmaker(engine, expire_on_commit=False, class_=AsyncSession)
    yield factory

    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(
    db_session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession, None]:
    async with db_session_factory() as session:
        yield session


class FakeStorageGateway:
    """模拟存储网关，记录收到的上传请求"""

    def __init__(self, fail_on: str | None = None):
        self.fail_on = fail_on
        self.uploads: list[dict] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        path = request.url.params["path"]
        if self.fail_on and self.fail_on in path:
            return httpx.Response(500, text="boom")
        self.uploads.append(
            {
                "path": path,
                "authorization": request.headers.get("Authorization"),
                "body": request.content,
            }
        )
        return httpx.Response(200, json={"url": f"https://cdn.test/{path}"})


@pytest.fixture
def storage_gateway() -> FakeStorageGateway:
    return FakeStorageGateway()


@pytest.fixture
def storage(storage_gateway: FakeStorageGateway) -> StorageService:
    return StorageService(
        base_url="https://storage.test",
        api_key="test-key",
        transport=httpx.MockTransport(storage_gateway),
    )
