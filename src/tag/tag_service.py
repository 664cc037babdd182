import logging
from typing import List, Optional, Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from core.repository import ContentRepository
from shared.models import PostTag, Tag

logger = logging.getLogger(__name__)


class TagService:
    """封装与 Tag 表相关的数据库操作。"""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.repository = ContentRepository(session)

    async def get_all_tags(self) -> List[Tag]:
        """获取数据库中所有的标签，按使用次数倒序。"""
        return await self.repository.get_all_tags()

    async def get_tag_by_name(self, name: str) -> Optional[Tag]:
        return await self.repository.get_tag_by_name(name)

    async def get_or_create_tag(self, name: str) -> Tag:
        """
        获取标签并将 usage_count 加一；不存在时以 usage_count=1 创建。
        先读后写，不是原子操作。
        """
        tag = await self.repository.get_tag_by_name(name)
        if tag is None:
            tag = Tag(name=name, usage_count=1)
        else:
            tag.usage_count = tag.usage_count + 1

        self.session.add(tag)
        await self.session.commit()
        await self.session.refresh(tag)
        return tag

    async def attach_tags(self, post_id: int, names: Sequence[str]) -> List[PostTag]:
        """
        逐个为帖子挂上标签，每一步单独提交。
        中途失败时已提交的标签和关联不会回滚。
        """
        links: List[PostTag] = []
        seen = set()
        for name in names:
            if name in seen:
                continue
            seen.add(name)

            tag = await self.get_or_create_tag(name)
            assert tag.id is not None

            link = PostTag(post_id=post_id, tag_id=tag.id)
            self.session.add(link)
            await self.session.commit()
            await self.session.refresh(link)
            links.append(link)

        if links:
            logger.info(f"帖子 {post_id} 关联了 {len(links)} 个标签")
        return links
