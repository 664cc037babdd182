from typing import Optional

from pydantic import BaseModel, Field

from shared.enum.post_status import PostStatus


class PostUpdateRequest(BaseModel):
    """更新帖子，未传入的字段保持不变"""

    id: int = Field(description="帖子ID")
    title: Optional[str] = Field(None, max_length=100)
    content: Optional[str] = Field(None, max_length=10000)
    status: Optional[PostStatus] = Field(None)
