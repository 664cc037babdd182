from pydantic import BaseModel, Field


class LikeStatus(BaseModel):
    liked: bool = Field(description="当前用户是否已点赞")
