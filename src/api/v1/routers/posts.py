"""帖子相关路由"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from api.v1.dependencies.security import require_auth
from api.v1.schemas.base import PaginatedResponse, SuccessResponse, page_to_offset
from api.v1.schemas.post import (
    PostCreateRequest,
    PostCreateResponse,
    PostDetail,
    PostDetailWithRelations,
    PostIdRequest,
    PostUpdateRequest,
)
from post.post_service import PostService
from shared.database import get_db_session
from shared.errors import ServiceError
from shared.models import User
from storage.storage_service import StorageService, current_storage

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/posts", tags=["帖子"])


@router.get(
    "/list", summary="分页获取已发布帖子", response_model=PaginatedResponse[PostDetail]
)
async def list_posts(
    page: int = Query(default=1, ge=1, description="页码，从1开始"),
    limit: int = Query(default=20, ge=1, le=100, description="每页数量 (范围: 1-100)"),
    session: AsyncSession = Depends(get_db_session),
):
    """按发布时间倒序返回已发布的帖子"""
    offset = page_to_offset(page, limit)
    posts, total = await PostService(session).list_published_posts(limit, offset)
    results = [PostDetail.model_validate(p, from_attributes=True) for p in posts]
    return PaginatedResponse(total=total, limit=limit, offset=offset, results=results)


@router.get(
    "/user/{user_id}",
    summary="分页获取某个用户的帖子",
    response_model=PaginatedResponse[PostDetail],
)
async def list_user_posts(
    user_id: int,
    page: int = Query(default=1, ge=1, description="页码，从1开始"),
    limit: int = Query(default=20, ge=1, le=100, description="每页数量 (范围: 1-100)"),
    session: AsyncSession = Depends(get_db_session),
):
    offset = page_to_offset(page, limit)
    posts, total = await PostService(session).list_user_posts(user_id, limit, offset)
    results = [PostDetail.model_validate(p, from_attributes=True) for p in posts]
    return PaginatedResponse(total=total, limit=limit, offset=offset, results=results)


@router.get(
    "/detail/{post_id}",
    summary="获取帖子详情",
    response_model=Optional[PostDetailWithRelations],
)
async def get_post(post_id: int, session: AsyncSession = Depends(get_db_session)):
    """
    返回帖子及其图片、评论和标签关联，帖子不存在时返回 null
    """
    aggregate = await PostService(session).get_post_detail(post_id)
    if aggregate is None:
        return None

    return PostDetailWithRelations.from_aggregate(aggregate)


@router.post("/create", summary="发布帖子", response_model=PostCreateResponse)
async def create_post(
    payload: PostCreateRequest,
    current_user: User = Depends(require_auth),
    session: AsyncSession = Depends(get_db_session),
    storage: Optional[StorageService] = Depends(current_storage),
):
    """
    创建帖子

    - title: 标题，最多 100 字
    - content: 正文，最多 10000 字
    - status: draft 或 published
    - images: 图片列表（Base64），最多 5 张
    - tags: 标签名列表，最多 5 个
    """
    assert current_user.id is not None
    try:
        post = await PostService(session, storage).create_post(
            user_id=current_user.id,
            title=payload.title,
            content=payload.content,
            status=payload.status,
            images=payload.images,
            tags=payload.tags,
        )
        assert post.id is not None
        return PostCreateResponse(post_id=post.id)
    except ServiceError:
        raise
    except Exception as e:
        logger.error(f"创建帖子失败: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="创建帖子失败"
        )


@router.post("/update", summary="更新帖子", response_model=SuccessResponse)
async def update_post(
    payload: PostUpdateRequest,
    current_user: User = Depends(require_auth),
    session: AsyncSession = Depends(get_db_session),
):
    """只有作者可以修改，未传入的字段保持不变"""
    assert current_user.id is not None
    await PostService(session).update_post(
        payload.id,
        current_user.id,
        title=payload.title,
        content=payload.content,
        status=payload.status,
    )
    return SuccessResponse()


@router.post("/delete", summary="删除帖子", response_model=SuccessResponse)
async def delete_post(
    payload: PostIdRequest,
    current_user: User = Depends(require_auth),
    session: AsyncSession = Depends(get_db_session),
):
    """只有作者可以删除"""
    assert current_user.id is not None
    await PostService(session).delete_post(payload.id, current_user.id)
    return SuccessResponse()
