import logging
from typing import Any, Dict, Optional

from fastapi import Depends, HTTPException, Request, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from api.v1.utils.jwt_utils import SESSION_MAX_AGE, sign_session_token, verify_session_token
from core.repository import ContentRepository
from shared.config import get_section, load_config
from shared.database import get_db_session
from shared.errors import AuthenticationRequiredError
from shared.models import User

logger = logging.getLogger(__name__)

SESSION_COOKIE_NAME = "session"

# 全局变量，在应用启动时初始化
_AUTH_CONFIG: Dict[str, Any] = {}


def initialize_api_security(config: Optional[Dict[str, Any]] = None):
    """在应用启动时调用，初始化会话签名配置"""
    global _AUTH_CONFIG
    if config is None:
        config = load_config()

    _AUTH_CONFIG = get_section(config, "auth")
    if _AUTH_CONFIG.get("jwt_secret"):
        logger.info("JWT 密钥已加载")
    else:
        logger.warning("认证配置字段 auth.jwt_secret 未配置，登录功能不可用")


def _get_secret() -> str:
    secret = _AUTH_CONFIG.get("jwt_secret")
    if not secret:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="JWT 认证服务未初始化",
        )
    return secret


def _cookie_options() -> Dict[str, Any]:
    options: Dict[str, Any] = {
        "path": "/",
        "httponly": True,
        "secure": bool(_AUTH_CONFIG.get("cookie_secure", True)),
        "samesite": "none" if _AUTH_CONFIG.get("cookie_secure", True) else "lax",
    }
    cookie_domain = _AUTH_CONFIG.get("cookie_domain")
    if cookie_domain:
        options["domain"] = cookie_domain
    return options


def issue_session_cookie(response: Response, user: User) -> str:
    """签发会话令牌并写入 Cookie"""
    assert user.id is not None
    token = sign_session_token(user.id, user.open_id, _get_secret(), SESSION_MAX_AGE)
    response.set_cookie(
        key=SESSION_COOKIE_NAME,
        value=token,
        max_age=SESSION_MAX_AGE,
        **_cookie_options(),
    )
    return token


def clear_session_cookie(response: Response) -> None:
    options = _cookie_options()
    response.delete_cookie(
        key=SESSION_COOKIE_NAME,
        path=options["path"],
        domain=options.get("domain"),
        secure=options["secure"],
        httponly=options["httponly"],
        samesite=options["samesite"],
    )


def _extract_token(request: Request) -> Optional[str]:
    """
    优先从 Authorization Bearer 中读取，回退到 Cookie
    """
    auth_header = request.headers.get("Authorization", "")
    if auth_header.startswith("Bearer "):
        token = auth_header[7:].strip()
        if token:
            return token
    return request.cookies.get(SESSION_COOKIE_NAME)


async def get_current_user(
    request: Request,
    session: AsyncSession = Depends(get_db_session),
) -> Optional[User]:
    """
    从请求中解析会话令牌并加载用户，匿名请求返回 None
    """
    token = _extract_token(request)
    if not token:
        return None

    payload = verify_session_token(token, _get_secret())
    if not payload:
        return None

    try:
        user_id = int(payload["id"])
    except (KeyError, TypeError, ValueError):
        return None

    user = await ContentRepository(session).get_user_by_id(user_id)
    if user is None:
        logger.debug(f"会话中的用户 {user_id} 已不存在")
    return user


async def require_auth(
    user: Optional[User] = Depends(get_current_user),
) -> User:
    """
    依赖函数，要求用户必须已认证
    如果未认证则抛出 401 错误
    """
    if not user:
        error = AuthenticationRequiredError()
        raise HTTPException(status_code=error.status_code, detail=error.message)
    return user
