from pydantic import BaseModel


class PostTagDetail(BaseModel):
    id: int
    post_id: int
    tag_id: int

    class Config:
        from_attributes = True
