import logging
from datetime import datetime, timezone

from sqlalchemy.ext.asyncio import AsyncSession

from auth.password import hash_password, verify_password
from core.repository import ContentRepository
from shared.errors import (
    AlreadyRegisteredError,
    AlreadyTakenError,
    InvalidCredentialsError,
)
from shared.models import User

logger = logging.getLogger(__name__)


class AuthService:
    """邮箱注册与登录"""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.repository = ContentRepository(session)

    async def register(self, email: str, password: str, username: str) -> User:
        """
        注册新用户

        Raises:
            AlreadyRegisteredError: 邮箱已存在
            AlreadyTakenError: 用户名已被占用
        """
        if await self.repository.get_user_by_email(email):
            raise AlreadyRegisteredError()
        if await self.repository.get_user_by_username(username):
            raise AlreadyTakenError()

        password_hash = await hash_password(password)
        user = User(
            email=email,
            username=username,
            password_hash=password_hash,
            open_id=f"email_{email}",
            login_method="email",
            name=username,
        )
        self.session.add(user)
        try:
            await self.session.commit()
            await self.session.refresh(user)
        except Exception as e:
            logger.error(f"注册用户 {email} 失败: {e}", exc_info=True)
            await self.session.rollback()
            raise

        logger.info(f"新用户注册: {user.id} ({username})")
        return user

    async def login(self, email: str, password: str) -> User:
        """
        校验邮箱和密码。邮箱不存在与密码错误返回同一个错误。
        """
        user = await self.repository.get_user_by_email(email)
        if not user or not user.password_hash:
            raise InvalidCredentialsError()

        if not await verify_password(password, user.password_hash):
            raise InvalidCredentialsError()

        user.last_signed_in = datetime.now(timezone.utc)
        self.session.add(user)
        await self.session.commit()
        await self.session.refresh(user)

        logger.info(f"用户 {user.id} 登录")
        return user
