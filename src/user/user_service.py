import base64
import binascii
import logging
import time
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from core.repository import ContentRepository
from shared.errors import AlreadyTakenError, StorageError
from shared.models import User
from storage.storage_service import StorageService

logger = logging.getLogger(__name__)


class UserService:
    """用户资料的读取与修改"""

    def __init__(self, session: AsyncSession, storage: Optional[StorageService] = None):
        self.session = session
        self.storage = storage
        self.repository = ContentRepository(session)

    async def get_profile(self, user_id: int) -> Optional[User]:
        return await self.repository.get_user_by_id(user_id)

    async def upload_profile_image(self, user_id: int, image_b64: str) -> str:
        """
        上传头像，返回公开 URL
        """
        if self.storage is None:
            raise StorageError("Failed to upload profile image")

        file_key = f"profile-images/{user_id}-{int(time.time() * 1000)}.jpg"
        try:
            image_bytes = base64.b64decode(image_b64)
            stored = await self.storage.put(file_key, image_bytes, "image/jpeg")
        except (binascii.Error, StorageError) as e:
            logger.error(f"用户 {user_id} 上传头像失败: {e}")
            raise StorageError("Failed to upload profile image") from e
        return stored.url

    async def update_profile(
        self,
        user_id: int,
        username: Optional[str] = None,
        bio: Optional[str] = None,
        profile_image: Optional[str] = None,
    ) -> Optional[User]:
        """
        修改调用者自己的资料，只写入传入的字段

        Raises:
            AlreadyTakenError: 用户名已被其他用户占用
            StorageError: 头像上传失败
        """
        if username:
            existing = await self.repository.get_user_by_username(username)
            if existing and existing.id != user_id:
                raise AlreadyTakenError()

        profile_image_url = None
        if profile_image:
            profile_image_url = await self.upload_profile_image(user_id, profile_image)

        user = await self.repository.update_user_profile(
            user_id,
            username=username,
            bio=bio,
            profile_image=profile_image_url,
        )
        if user:
            logger.info(f"用户 {user_id} 已更新资料")
        return user
