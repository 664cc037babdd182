from pydantic import BaseModel, Field


class CommentCreateRequest(BaseModel):
    post_id: int = Field(description="帖子ID")
    content: str = Field(max_length=500, description="评论内容，最多 500 字")
