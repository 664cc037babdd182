import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from auth.auth_service import AuthService
from auth.password import verify_password_sync
from core.repository import ContentRepository
from shared.errors import (
    AlreadyRegisteredError,
    AlreadyTakenError,
    InvalidCredentialsError,
)


@pytest.mark.asyncio
async def test_register_creates_email_user(db_session: AsyncSession):
    """测试注册：生成 open_id、登录方式，并保存密码哈希"""
    user = await AuthService(db_session).register(
        email="rex@example.com", password="woofwoof1", username="rex_owner"
    )

    assert user.id is not None
    assert user.open_id == "email_rex@example.com"
    assert user.login_method == "email"
    assert user.name == "rex_owner"
    assert user.password_hash != "woofwoof1"
    assert verify_password_sync("woofwoof1", user.password_hash)

    found = await ContentRepository(db_session).get_user_by_open_id(
        "email_rex@example.com"
    )
    assert found is not None
    assert found.id == user.id


@pytest.mark.asyncio
async def test_register_duplicate_email(db_session: AsyncSession):
    """测试重复邮箱注册"""
    service = AuthService(db_session)
    await service.register("rex@example.com", "woofwoof1", "rex_owner")

    with pytest.raises(AlreadyRegisteredError) as exc_info:
        await service.register("rex@example.com", "woofwoof2", "another")
    assert "already registered" in exc_info.value.message
    assert exc_info.value.status_code == 409


@pytest.mark.asyncio
async def test_register_duplicate_username(db_session: AsyncSession):
    """测试重复用户名注册"""
    service = AuthService(db_session)
    await service.register("rex@example.com", "woofwoof1", "rex_owner")

    with pytest.raises(AlreadyTakenError) as exc_info:
        await service.register("luna@example.com", "woofwoof2", "rex_owner")
    assert "already taken" in exc_info.value.message


@pytest.mark.asyncio
async def test_register_checks_email_before_username(db_session: AsyncSession):
    """邮箱和用户名都重复时，优先报告邮箱已注册"""
    service = AuthService(db_session)
    await service.register("rex@example.com", "woofwoof1", "rex_owner")

    with pytest.raises(AlreadyRegisteredError):
        await service.register("rex@example.com", "woofwoof1", "rex_owner")


@pytest.mark.asyncio
async def test_login_success_updates_last_signed_in(db_session: AsyncSession):
    """测试登录成功后更新最后登录时间"""
    service = AuthService(db_session)
    registered = await service.register("rex@example.com", "woofwoof1", "rex_owner")
    before = registered.last_signed_in

    user = await service.login("rex@example.com", "woofwoof1")

    assert user.id == registered.id
    assert user.last_signed_in >= before


@pytest.mark.asyncio
async def test_login_wrong_password(db_session: AsyncSession):
    service = AuthService(db_session)
    await service.register("rex@example.com", "woofwoof1", "rex_owner")

    with pytest.raises(InvalidCredentialsError):
        await service.login("rex@example.com", "wrong-password")


@pytest.mark.asyncio
async def test_login_unknown_email_same_error(db_session: AsyncSession):
    """未注册的邮箱与密码错误返回同一个错误"""
    with pytest.raises(InvalidCredentialsError) as exc_info:
        await AuthService(db_session).login("nobody@example.com", "woofwoof1")
    assert exc_info.value.message == "Invalid credentials"
