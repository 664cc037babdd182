import logging
from typing import List, Sequence, Tuple

from sqlalchemy.ext.asyncio import AsyncSession

from core.repository import ContentRepository
from shared.models import Post

logger = logging.getLogger(__name__)


class PostSearchService:
    """
    帖子搜索。

    目前只返回已发布帖子的分页列表，不按关键词或标签过滤。
    """

    def __init__(self, session: AsyncSession):
        self.session = session
        self.repository = ContentRepository(session)

    async def search_posts(
        self, query: str, limit: int = 20, offset: int = 0
    ) -> Tuple[List[Post], int]:
        # TODO: 按 query 匹配 title / content
        logger.debug(f"搜索帖子: {query!r} (未按关键词过滤)")
        posts = await self.repository.get_published_posts(limit, offset)
        total = await self.repository.count_published_posts()
        return posts, total

    async def search_posts_by_tags(
        self, tags: Sequence[str], limit: int = 20, offset: int = 0
    ) -> Tuple[List[Post], int]:
        # TODO: 只返回包含全部 tags 的帖子
        logger.debug(f"按标签搜索帖子: {list(tags)} (未按标签过滤)")
        posts = await self.repository.get_published_posts(limit, offset)
        total = await self.repository.count_published_posts()
        return posts, total
