from datetime import datetime, timezone
from typing import Optional

from sqlmodel import Field, SQLModel

from shared.enum.user_role import UserRole


class User(SQLModel, table=True):
    """用户账号与个人资料"""

    __tablename__ = "users"  # type: ignore

    id: Optional[int] = Field(default=None, primary_key=True)
    open_id: str = Field(
        max_length=64, unique=True, index=True, description="外部身份标识，邮箱注册为 email_<邮箱>"
    )
    username: Optional[str] = Field(default=None, max_length=20, unique=True)
    name: Optional[str] = Field(default=None)
    email: Optional[str] = Field(default=None, max_length=320, unique=True)
    password_hash: Optional[str] = Field(default=None, max_length=255)
    profile_image: Optional[str] = Field(default=None, max_length=512)
    bio: Optional[str] = Field(default=None)
    login_method: Optional[str] = Field(default=None, max_length=64)
    role: UserRole = Field(default=UserRole.USER)

    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        sa_column_kwargs={"onupdate": lambda: datetime.now(timezone.utc)},
    )
    last_signed_in: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc)
    )
