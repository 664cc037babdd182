"""搜索相关路由"""

import logging

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from api.v1.schemas.base import PaginatedResponse, page_to_offset
from api.v1.schemas.post import PostDetail
from search.post_search_service import PostSearchService
from shared.database import get_db_session

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/search", tags=["搜索"])


@router.get("/posts", summary="搜索帖子", response_model=PaginatedResponse[PostDetail])
async def search_posts(
    query: str = Query(default="", description="搜索关键词"),
    page: int = Query(default=1, ge=1, description="页码，从1开始"),
    limit: int = Query(default=20, ge=1, le=100, description="每页数量 (范围: 1-100)"),
    session: AsyncSession = Depends(get_db_session),
):
    """只返回已发布的帖子"""
    offset = page_to_offset(page, limit)
    posts, total = await PostSearchService(session).search_posts(query, limit, offset)
    results = [PostDetail.model_validate(p, from_attributes=True) for p in posts]
    return PaginatedResponse(total=total, limit=limit, offset=offset, results=results)
