from pydantic import BaseModel, Field


class PostIdRequest(BaseModel):
    id: int = Field(description="帖子ID")
