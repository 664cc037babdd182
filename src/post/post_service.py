import base64
import binascii
import logging
from typing import List, Optional, Sequence, Tuple

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import delete

from api.v1.schemas.post.image_upload_data import ImageUploadData
from core.repository import ContentRepository
from post.dto.post_aggregate import PostAggregate
from shared.enum.post_status import PostStatus
from shared.errors import StorageError, UnauthorizedError
from shared.models import Image, Post
from storage.storage_service import StorageService
from tag.tag_service import TagService

logger = logging.getLogger(__name__)


class PostService:
    """帖子服务，提供帖子的CRUD操作"""

    def __init__(self, session: AsyncSession, storage: Optional[StorageService] = None):
        self.session = session
        self.storage = storage
        self.repository = ContentRepository(session)

    async def create_post(
        self,
        user_id: int,
        title: str,
        content: str,
        status: PostStatus = PostStatus.DRAFT,
        images: Sequence[ImageUploadData] = (),
        tags: Sequence[str] = (),
    ) -> Post:
        """
        创建帖子，依次上传图片、挂上标签。

        各步骤分别提交，没有事务包裹：中途失败时之前写入的行会保留。
        """
        post = Post(user_id=user_id, title=title, content=content, status=status)
        self.session.add(post)
        try:
            await self.session.commit()
            await self.session.refresh(post)
        except Exception as e:
            logger.error(f"创建帖子失败: {e}", exc_info=True)
            await self.session.rollback()
            raise

        assert post.id is not None
        logger.info(f"用户 {user_id} 创建帖子 {post.id}: {title}")

        if images:
            await self.add_images(post.id, images)
        if tags:
            await TagService(self.session).attach_tags(post.id, tags)

        return post

    async def add_images(
        self, post_id: int, images: Sequence[ImageUploadData]
    ) -> List[Image]:
        """
        按顺序上传图片，每张图片对应一行，order 为其位置
        """
        if self.storage is None:
            raise StorageError("Storage service not configured")

        saved: List[Image] = []
        for i, img in enumerate(images):
            try:
                data = base64.b64decode(img.data)
            except binascii.Error as e:
                raise StorageError(f"Invalid image data: {img.filename}") from e

            stored = await self.storage.put(
                f"posts/{post_id}/{img.filename}", data, "image/jpeg"
            )
            image = Image(post_id=post_id, url=stored.url, file_key=stored.key, order=i)
            self.session.add(image)
            await self.session.commit()
            await self.session.refresh(image)
            saved.append(image)

        return saved

    async def get_post(self, post_id: int) -> Optional[Post]:
        return await self.repository.get_post_by_id(post_id)

    async def get_post_detail(self, post_id: int) -> Optional[PostAggregate]:
        """
        获取帖子及其图片、评论、标签关联
        """
        post = await self.repository.get_post_by_id(post_id)
        if not post:
            return None

        return PostAggregate(
            post=post,
            images=await self.repository.get_post_images(post_id),
            comments=await self.repository.get_post_comments(post_id),
            tags=await self.repository.get_post_tags(post_id),
        )

    async def list_published_posts(
        self, limit: int = 20, offset: int = 0
    ) -> Tuple[List[Post], int]:
        posts = await self.repository.get_published_posts(limit, offset)
        total = await self.repository.count_published_posts()
        return posts, total

    async def list_user_posts(
        self, user_id: int, limit: int = 20, offset: int = 0
    ) -> Tuple[List[Post], int]:
        posts = await self.repository.get_user_posts(user_id, limit, offset)
        total = await self.repository.count_user_posts(user_id)
        return posts, total

    async def _get_owned_post(self, post_id: int, user_id: int) -> Post:
        post = await self.repository.get_post_by_id(post_id)
        if not post or post.user_id != user_id:
            raise UnauthorizedError()
        return post

    async def update_post(
        self,
        post_id: int,
        user_id: int,
        title: Optional[str] = None,
        content: Optional[str] = None,
        status: Optional[PostStatus] = None,
    ) -> Post:
        """
        更新帖子，仅作者可操作

        Raises:
            UnauthorizedError: 帖子不存在或调用者不是作者
        """
        post = await self._get_owned_post(post_id, user_id)

        if title is not None:
            post.title = title
        if content is not None:
            post.content = content
        if status is not None:
            post.status = status

        self.session.add(post)
        try:
            await self.session.commit()
            await self.session.refresh(post)
        except Exception as e:
            logger.error(f"更新帖子失败: {e}", exc_info=True)
            await self.session.rollback()
            raise

        logger.info(f"帖子 {post_id} 已更新")
        return post

    async def delete_post(self, post_id: int, user_id: int) -> bool:
        """
        删除帖子，仅作者可操作。图片、评论、标签关联不会级联删除。
        """
        await self._get_owned_post(post_id, user_id)

        statement = delete(Post).where(Post.id == post_id)  # type: ignore
        result = await self.session.execute(statement)
        await self.session.commit()
        deleted = result.rowcount > 0
        if deleted:
            logger.info(f"帖子 {post_id} 已删除")
        return deleted
