import logging

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import and_, delete

from core.repository import ContentRepository
from shared.models import Like

logger = logging.getLogger(__name__)


class LikeService:
    """点赞服务，同时维护帖子的 like_count"""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.repository = ContentRepository(session)

    async def is_liked(self, post_id: int, user_id: int) -> bool:
        return await self.repository.get_user_like(post_id, user_id) is not None

    async def toggle_like(self, post_id: int, user_id: int) -> bool:
        """
        切换点赞状态

        Returns:
            bool: 切换后是否处于已点赞状态
        """
        existing = await self.repository.get_user_like(post_id, user_id)

        if existing:
            statement = delete(Like).where(
                and_(
                    Like.post_id == post_id,  # type: ignore
                    Like.user_id == user_id,  # type: ignore
                )
            )
            await self.session.execute(statement)
            await self.session.commit()
            await self.update_like_count(post_id, -1)
            logger.debug(f"用户 {user_id} 取消点赞帖子 {post_id}")
            return False

        self.session.add(Like(post_id=post_id, user_id=user_id))
        await self.session.commit()
        await self.update_like_count(post_id, 1)
        logger.debug(f"用户 {user_id} 点赞帖子 {post_id}")
        return True

    async def update_like_count(self, post_id: int, delta: int) -> None:
        """
        更新帖子的点赞数（delta 为 +1 或 -1），不低于 0
        """
        post = await self.repository.get_post_by_id(post_id)
        if not post:
            return

        post.like_count = max(0, post.like_count + delta)
        self.session.add(post)
        await self.session.commit()
