from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from shared.enum.user_role import UserRole


class UserProfile(BaseModel):
    """用户公开资料，不包含密码哈希"""

    id: int = Field(description="用户ID")
    username: Optional[str] = Field(None, description="用户名")
    name: Optional[str] = Field(None, description="显示名称")
    email: Optional[str] = Field(None, description="邮箱")
    profile_image: Optional[str] = Field(None, description="头像URL")
    bio: Optional[str] = Field(None, description="个人简介")
    role: UserRole = Field(description="角色")
    created_at: datetime = Field(description="注册时间")
    last_signed_in: datetime = Field(description="最后登录时间")

    class Config:
        from_attributes = True
