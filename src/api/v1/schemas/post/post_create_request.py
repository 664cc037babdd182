from typing import Annotated, List

from pydantic import BaseModel, Field, StringConstraints

from api.v1.schemas.post.image_upload_data import ImageUploadData
from shared.enum.post_status import PostStatus

TagName = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=20)]


class PostCreateRequest(BaseModel):
    """发帖请求"""

    title: str = Field(max_length=100, description="标题，最多 100 字")
    content: str = Field(max_length=10000, description="正文，最多 10000 字")
    status: PostStatus = Field(default=PostStatus.DRAFT, description="draft 或 published")
    images: List[ImageUploadData] = Field(
        default_factory=list, max_length=5, description="图片，最多 5 张"
    )
    tags: List[TagName] = Field(
        default_factory=list, max_length=5, description="标签名，最多 5 个"
    )
