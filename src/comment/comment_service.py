import logging
from typing import List

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import delete

from core.repository import ContentRepository
from shared.errors import UnauthorizedError
from shared.models import Comment

logger = logging.getLogger(__name__)


class CommentService:
    """评论服务，同时维护帖子的 comment_count"""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.repository = ContentRepository(session)

    async def list_comments(self, post_id: int) -> List[Comment]:
        return await self.repository.get_post_comments(post_id)

    async def create_comment(self, post_id: int, user_id: int, content: str) -> Comment:
        """
        发表评论，然后重新读取帖子并写入 comment_count + 1
        """
        comment = Comment(post_id=post_id, user_id=user_id, content=content)
        self.session.add(comment)
        try:
            await self.session.commit()
            await self.session.refresh(comment)
        except Exception as e:
            logger.error(f"发表评论失败: {e}", exc_info=True)
            await self.session.rollback()
            raise

        await self.update_comment_count(post_id, 1)
        logger.info(f"用户 {user_id} 评论了帖子 {post_id}")
        return comment

    async def delete_comment(self, comment_id: int, user_id: int) -> bool:
        """
        删除评论，仅评论作者可操作

        Raises:
            UnauthorizedError: 评论不存在或调用者不是评论作者
        """
        comment = await self.repository.get_comment_by_id(comment_id)
        if not comment or comment.user_id != user_id:
            raise UnauthorizedError()

        post_id = comment.post_id
        statement = delete(Comment).where(Comment.id == comment_id)  # type: ignore
        result = await self.session.execute(statement)
        await self.session.commit()

        await self.update_comment_count(post_id, -1)
        logger.info(f"评论 {comment_id} 已删除")
        return result.rowcount > 0

    async def update_comment_count(self, post_id: int, delta: int) -> None:
        """
        更新帖子的评论数（delta 为 +1 或 -1），不低于 0
        """
        post = await self.repository.get_post_by_id(post_id)
        if not post:
            logger.debug(f"帖子 {post_id} 不存在，跳过评论计数更新")
            return

        post.comment_count = max(0, post.comment_count + delta)
        self.session.add(post)
        await self.session.commit()
