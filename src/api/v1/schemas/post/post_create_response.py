from pydantic import BaseModel, Field


class PostCreateResponse(BaseModel):
    """发帖成功响应"""

    success: bool = Field(default=True)
    post_id: int = Field(description="新创建的帖子ID")
