from typing import Optional

from pydantic import BaseModel, Field


class UpdateProfileRequest(BaseModel):
    """修改个人资料，未传入的字段保持不变"""

    username: Optional[str] = Field(None, min_length=3, max_length=20)
    bio: Optional[str] = Field(None, max_length=500)
    profile_image: Optional[str] = Field(None, description="Base64 编码的头像图片")
