from pydantic import BaseModel, Field


class LikeToggleRequest(BaseModel):
    post_id: int = Field(description="帖子ID")
