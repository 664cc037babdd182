"""评论相关路由"""

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from api.v1.dependencies.security import require_auth
from api.v1.schemas.base import SuccessResponse
from api.v1.schemas.comment import (
    CommentCreateRequest,
    CommentDeleteRequest,
    CommentDetail,
)
from comment.comment_service import CommentService
from shared.database import get_db_session
from shared.errors import ServiceError
from shared.models import User

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/comments", tags=["评论"])


@router.get(
    "/list/{post_id}", summary="获取帖子的评论", response_model=List[CommentDetail]
)
async def list_comments(post_id: int, session: AsyncSession = Depends(get_db_session)):
    """按发表时间正序返回"""
    comments = await CommentService(session).list_comments(post_id)
    return [CommentDetail.model_validate(c, from_attributes=True) for c in comments]


@router.post("/create", summary="发表评论", response_model=SuccessResponse)
async def create_comment(
    payload: CommentCreateRequest,
    current_user: User = Depends(require_auth),
    session: AsyncSession = Depends(get_db_session),
):
    """
    发表评论

    - post_id: 帖子ID
    - content: 评论内容，最多 500 字
    """
    assert current_user.id is not None
    try:
        await CommentService(session).create_comment(
            payload.post_id, current_user.id, payload.content
        )
        return SuccessResponse()
    except ServiceError:
        raise
    except Exception as e:
        logger.error(f"发表评论失败: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="发表评论失败"
        )


@router.post("/delete", summary="删除评论", response_model=SuccessResponse)
async def delete_comment(
    payload: CommentDeleteRequest,
    current_user: User = Depends(require_auth),
    session: AsyncSession = Depends(get_db_session),
):
    """只有评论作者可以删除"""
    assert current_user.id is not None
    await CommentService(session).delete_comment(payload.id, current_user.id)
    return SuccessResponse()
