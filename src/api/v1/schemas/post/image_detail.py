from datetime import datetime

from pydantic import BaseModel


class ImageDetail(BaseModel):
    id: int
    post_id: int
    url: str
    file_key: str
    order: int
    created_at: datetime

    class Config:
        from_attributes = True
