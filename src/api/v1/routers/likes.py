"""点赞相关路由"""

import logging

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from api.v1.dependencies.security import require_auth
from api.v1.schemas.like import LikeStatus, LikeToggleRequest
from like.like_service import LikeService
from shared.database import get_db_session
from shared.models import User

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/likes", tags=["点赞"])


@router.post("/toggle", summary="点赞 / 取消点赞", response_model=LikeStatus)
async def toggle_like(
    payload: LikeToggleRequest,
    current_user: User = Depends(require_auth),
    session: AsyncSession = Depends(get_db_session),
):
    """已点赞则取消，未点赞则点赞，返回切换后的状态"""
    assert current_user.id is not None
    liked = await LikeService(session).toggle_like(payload.post_id, current_user.id)
    return LikeStatus(liked=liked)


@router.get("/is-liked", summary="当前用户是否已点赞", response_model=LikeStatus)
async def is_liked(
    post_id: int = Query(description="帖子ID"),
    current_user: User = Depends(require_auth),
    session: AsyncSession = Depends(get_db_session),
):
    assert current_user.id is not None
    liked = await LikeService(session).is_liked(post_id, current_user.id)
    return LikeStatus(liked=liked)
