"""邮箱注册 / 登录相关路由"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from api.v1.dependencies.security import (
    clear_session_cookie,
    get_current_user,
    issue_session_cookie,
)
from api.v1.schemas.auth import LoginRequest, LoginResponse, RegisterRequest
from api.v1.schemas.base import SuccessResponse
from api.v1.schemas.user import UserProfile
from auth.auth_service import AuthService
from shared.database import get_db_session
from shared.errors import ServiceError
from shared.models import User

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["认证"])


@router.get("/me", summary="获取当前登录用户", response_model=Optional[UserProfile])
async def me(current_user: Optional[User] = Depends(get_current_user)):
    """未登录时返回 null"""
    if current_user is None:
        return None
    return UserProfile.model_validate(current_user, from_attributes=True)


@router.post("/register", summary="邮箱注册", response_model=SuccessResponse)
async def register(
    payload: RegisterRequest,
    session: AsyncSession = Depends(get_db_session),
):
    """
    使用邮箱注册新账号

    - email: 邮箱，不可与已有账号重复
    - password: 密码，至少 8 位
    - username: 用户名，3-20 位，不可重复
    """
    try:
        await AuthService(session).register(
            email=payload.email,
            password=payload.password,
            username=payload.username,
        )
        return SuccessResponse()
    except ServiceError:
        raise
    except Exception as e:
        logger.error(f"注册失败: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="注册失败"
        )


@router.post("/login", summary="邮箱登录", response_model=LoginResponse)
async def login(
    payload: LoginRequest,
    response: Response,
    session: AsyncSession = Depends(get_db_session),
):
    """校验邮箱和密码，成功后写入 session Cookie"""
    try:
        user = await AuthService(session).login(payload.email, payload.password)
        assert user.id is not None
        issue_session_cookie(response, user)
        return LoginResponse(user_id=user.id)
    except (ServiceError, HTTPException):
        raise
    except Exception as e:
        logger.error(f"登录失败: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="登录失败"
        )


@router.post("/logout", summary="退出登录", response_model=SuccessResponse)
async def logout(response: Response):
    """退出登录并清除 session cookie"""
    clear_session_cookie(response)
    return SuccessResponse()
