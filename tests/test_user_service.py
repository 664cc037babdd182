import base64

import httpx
import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession

from shared.errors import AlreadyTakenError, StorageError
from shared.models import User
from storage.storage_service import StorageService
from user.user_service import UserService


async def _make_user(session: AsyncSession, name: str) -> User:
    user = User(
        open_id=f"email_{name}@example.com",
        email=f"{name}@example.com",
        username=name,
        login_method="email",
    )
    session.add(user)
    await session.commit()
    await session.refresh(user)
    return user


@pytest_asyncio.fixture
async def users(db_session: AsyncSession):
    return await _make_user(db_session, "biscuit"), await _make_user(db_session, "pepper")


@pytest.mark.asyncio
async def test_update_bio_only(db_session: AsyncSession, users):
    """只传入 bio 时其他字段保持不变"""
    biscuit, _ = users
    updated = await UserService(db_session).update_profile(biscuit.id, bio="Loves naps")

    assert updated is not None
    assert updated.bio == "Loves naps"
    assert updated.username == "biscuit"
    assert updated.profile_image is None


@pytest.mark.asyncio
async def test_update_username_taken_by_other(db_session: AsyncSession, users):
    biscuit, _ = users

    with pytest.raises(AlreadyTakenError):
        await UserService(db_session).update_profile(biscuit.id, username="pepper")

    profile = await UserService(db_session).get_profile(biscuit.id)
    assert profile.username == "biscuit"


@pytest.mark.asyncio
async def test_update_username_to_own_name(db_session: AsyncSession, users):
    """改成自己当前的用户名不算冲突"""
    biscuit, _ = users
    updated = await UserService(db_session).update_profile(biscuit.id, username="biscuit")
    assert updated.username == "biscuit"


@pytest.mark.asyncio
async def test_update_profile_image_uploads(
    db_session: AsyncSession, users, storage, storage_gateway
):
    """头像上传到 profile-images/ 下并保存公开 URL"""
    biscuit, _ = users
    image = base64.b64encode(b"jpeg-bytes").decode()

    updated = await UserService(db_session, storage).update_profile(
        biscuit.id, profile_image=image
    )

    assert len(storage_gateway.uploads) == 1
    path = storage_gateway.uploads[0]["path"]
    assert path.startswith(f"profile-images/{biscuit.id}-")
    assert path.endswith(".jpg")
    assert updated.profile_image == f"https://cdn.test/{path}"


@pytest.mark.asyncio
async def test_update_profile_image_failure(
    db_session: AsyncSession, users, storage, storage_gateway
):
    """上传失败时报错，资料不变"""
    biscuit, _ = users
    storage_gateway.fail_on = "profile-images"

    with pytest.raises(StorageError) as exc_info:
        await UserService(db_session, storage).update_profile(
            biscuit.id, bio="new bio", profile_image=base64.b64encode(b"x").decode()
        )
    assert exc_info.value.message == "Failed to upload profile image"

    profile = await UserService(db_session).get_profile(biscuit.id)
    assert profile.bio is None


@pytest.mark.asyncio
async def test_get_profile_missing(db_session: AsyncSession):
    assert await UserService(db_session).get_profile(999) is None


@pytest.mark.asyncio
async def test_update_profile_image_gateway_returns_html(db_session: AsyncSession, users):
    """网关返回非 JSON 响应时同样报头像上传失败"""
    biscuit, _ = users
    storage = StorageService(
        "https://storage.test",
        transport=httpx.MockTransport(
            lambda request: httpx.Response(200, text="<html>ok</html>")
        ),
    )

    with pytest.raises(StorageError) as exc_info:
        await UserService(db_session, storage).update_profile(
            biscuit.id, profile_image=base64.b64encode(b"x").decode()
        )
    assert exc_info.value.message == "Failed to upload profile image"
