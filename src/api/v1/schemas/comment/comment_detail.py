from datetime import datetime

from pydantic import BaseModel


class CommentDetail(BaseModel):
    id: int
    post_id: int
    user_id: int
    content: str
    created_at: datetime

    class Config:
        from_attributes = True
