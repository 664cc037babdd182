from pydantic import BaseModel, Field


class CommentDeleteRequest(BaseModel):
    id: int = Field(description="评论ID")
