"""标签相关路由"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from api.v1.schemas.base import PaginatedResponse, page_to_offset
from api.v1.schemas.post import PostDetail
from api.v1.schemas.tag import TagDetail
from search.post_search_service import PostSearchService
from shared.database import get_db_session
from tag.tag_service import TagService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/tags", tags=["标签"])


@router.get("/list", summary="获取所有标签", response_model=List[TagDetail])
async def list_tags(session: AsyncSession = Depends(get_db_session)):
    """按使用次数倒序"""
    tags = await TagService(session).get_all_tags()
    return [TagDetail.model_validate(t, from_attributes=True) for t in tags]


@router.get("/by-name", summary="按名称获取标签", response_model=Optional[TagDetail])
async def get_tag_by_name(
    name: str = Query(description="标签名"),
    session: AsyncSession = Depends(get_db_session),
):
    tag = await TagService(session).get_tag_by_name(name)
    if tag is None:
        return None
    return TagDetail.model_validate(tag, from_attributes=True)


@router.get(
    "/search", summary="按标签搜索帖子", response_model=PaginatedResponse[PostDetail]
)
async def search_by_tags(
    tags: Optional[List[str]] = Query(None, description="标签名列表"),
    page: int = Query(default=1, ge=1, description="页码，从1开始"),
    limit: int = Query(default=20, ge=1, le=100, description="每页数量 (范围: 1-100)"),
    session: AsyncSession = Depends(get_db_session),
):
    offset = page_to_offset(page, limit)
    posts, total = await PostSearchService(session).search_posts_by_tags(
        tags or [], limit, offset
    )
    results = [PostDetail.model_validate(p, from_attributes=True) for p in posts]
    return PaginatedResponse(total=total, limit=limit, offset=offset, results=results)
