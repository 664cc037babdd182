import logging
from typing import Any, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import and_, asc, desc, func, select

from shared.enum.post_status import PostStatus
from shared.models import Comment, Image, Like, Post, PostTag, Tag, User

logger = logging.getLogger(__name__)


class ContentRepository:
    """封装常用的查询与更新，供各业务服务复用。"""

    def __init__(self, session: AsyncSession):
        self.session = session

    # 用户

    async def get_user_by_id(self, user_id: int) -> Optional[User]:
        return await self.session.get(User, user_id)

    async def get_user_by_open_id(self, open_id: str) -> Optional[User]:
        statement = select(User).where(User.open_id == open_id).limit(1)
        result = await self.session.execute(statement)
        return result.scalar_one_or_none()

    async def get_user_by_email(self, email: str) -> Optional[User]:
        statement = select(User).where(User.email == email).limit(1)
        result = await self.session.execute(statement)
        return result.scalar_one_or_none()

    async def get_user_by_username(self, username: str) -> Optional[User]:
        statement = select(User).where(User.username == username).limit(1)
        result = await self.session.execute(statement)
        return result.scalar_one_or_none()

    async def update_user_profile(self, user_id: int, **fields: Any) -> Optional[User]:
        """
        只写入非 None 的字段，返回更新后的用户
        """
        user = await self.get_user_by_id(user_id)
        if not user:
            return None

        for key, value in fields.items():
            if value is not None:
                setattr(user, key, value)

        self.session.add(user)
        await self.session.commit()
        await self.session.refresh(user)
        return user

    # 帖子

    async def get_published_posts(self, limit: int, offset: int) -> List[Post]:
        statement = (
            select(Post)
            .where(Post.status == PostStatus.PUBLISHED)
            .order_by(desc(Post.created_at), desc(Post.id))
            .limit(limit)
            .offset(offset)
        )
        result = await self.session.execute(statement)
        return list(result.scalars().all())

    async def count_published_posts(self) -> int:
        statement = select(func.count()).select_from(Post).where(
            Post.status == PostStatus.PUBLISHED
        )
        result = await self.session.execute(statement)
        return result.scalar_one_or_none() or 0

    async def get_post_by_id(self, post_id: int) -> Optional[Post]:
        statement = select(Post).where(Post.id == post_id).limit(1)
        result = await self.session.execute(statement)
        return result.scalar_one_or_none()

    async def get_user_posts(self, user_id: int, limit: int, offset: int) -> List[Post]:
        statement = (
            select(Post)
            .where(Post.user_id == user_id)
            .order_by(desc(Post.created_at), desc(Post.id))
            .limit(limit)
            .offset(offset)
        )
        result = await self.session.execute(statement)
        return list(result.scalars().all())

    async def count_user_posts(self, user_id: int) -> int:
        statement = select(func.count()).select_from(Post).where(Post.user_id == user_id)
        result = await self.session.execute(statement)
        return result.scalar_one_or_none() or 0

    # 标签

    async def get_tag_by_name(self, name: str) -> Optional[Tag]:
        statement = select(Tag).where(Tag.name == name).limit(1)
        result = await self.session.execute(statement)
        return result.scalar_one_or_none()

    async def get_all_tags(self) -> List[Tag]:
        """按使用次数倒序获取所有标签"""
        statement = select(Tag).order_by(desc(Tag.usage_count), asc(Tag.id))
        result = await self.session.execute(statement)
        return list(result.scalars().all())

    async def get_post_tags(self, post_id: int) -> List[PostTag]:
        statement = select(PostTag).where(PostTag.post_id == post_id).order_by(
            asc(PostTag.id)
        )
        result = await self.session.execute(statement)
        return list(result.scalars().all())

    # 评论

    async def get_post_comments(self, post_id: int) -> List[Comment]:
        statement = (
            select(Comment)
            .where(Comment.post_id == post_id)
            .order_by(asc(Comment.created_at), asc(Comment.id))
        )
        result = await self.session.execute(statement)
        return list(result.scalars().all())

    async def get_comment_by_id(self, comment_id: int) -> Optional[Comment]:
        statement = select(Comment).where(Comment.id == comment_id).limit(1)
        result = await self.session.execute(statement)
        return result.scalar_one_or_none()

    # 点赞

    async def get_user_like(self, post_id: int, user_id: int) -> Optional[Like]:
        statement = (
            select(Like)
            .where(and_(Like.post_id == post_id, Like.user_id == user_id))
            .limit(1)
        )
        result = await self.session.execute(statement)
        return result.scalars().first()

    # 图片

    async def get_post_images(self, post_id: int) -> List[Image]:
        statement = select(Image).where(Image.post_id == post_id).order_by(
            asc(Image.order)
        )
        result = await self.session.execute(statement)
        return list(result.scalars().all())
