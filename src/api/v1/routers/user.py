"""用户资料相关路由"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from api.v1.dependencies.security import require_auth
from api.v1.schemas.base import SuccessResponse
from api.v1.schemas.user import UpdateProfileRequest, UserProfile
from shared.database import get_db_session
from shared.errors import ServiceError
from shared.models import User
from storage.storage_service import StorageService, current_storage
from user.user_service import UserService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/user", tags=["用户"])


@router.get(
    "/profile/{user_id}", summary="获取用户资料", response_model=Optional[UserProfile]
)
async def get_profile(
    user_id: int,
    current_user: User = Depends(require_auth),
    session: AsyncSession = Depends(get_db_session),
):
    """用户不存在时返回 null"""
    user = await UserService(session).get_profile(user_id)
    if user is None:
        return None
    return UserProfile.model_validate(user, from_attributes=True)


@router.post("/profile", summary="修改个人资料", response_model=SuccessResponse)
async def update_profile(
    payload: UpdateProfileRequest,
    current_user: User = Depends(require_auth),
    session: AsyncSession = Depends(get_db_session),
    storage: Optional[StorageService] = Depends(current_storage),
):
    """
    修改当前用户的资料

    - username: 新用户名（可选），不可与他人重复
    - bio: 个人简介（可选），最多 500 字
    - profile_image: Base64 编码的头像（可选）
    """
    assert current_user.id is not None
    try:
        await UserService(session, storage).update_profile(
            current_user.id,
            username=payload.username,
            bio=payload.bio,
            profile_image=payload.profile_image,
        )
        return SuccessResponse()
    except ServiceError:
        raise
    except Exception as e:
        logger.error(f"修改用户 {current_user.id} 资料失败: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="修改资料失败"
        )
