from datetime import datetime
from typing import List

from pydantic import BaseModel, Field

from api.v1.schemas.comment.comment_detail import CommentDetail
from api.v1.schemas.post.image_detail import ImageDetail
from api.v1.schemas.post.post_tag_detail import PostTagDetail
from shared.enum.post_status import PostStatus


class PostDetail(BaseModel):
    """帖子基本信息"""

    id: int = Field(description="帖子ID")
    user_id: int = Field(description="作者用户ID")
    title: str = Field(description="标题")
    content: str = Field(description="正文")
    status: PostStatus = Field(description="状态")
    like_count: int = Field(description="点赞数")
    comment_count: int = Field(description="评论数")
    created_at: datetime = Field(description="发布时间")
    updated_at: datetime = Field(description="最后更新时间")

    class Config:
        from_attributes = True


class PostDetailWithRelations(PostDetail):
    """帖子详情，附带图片、评论与标签关联"""

    images: List[ImageDetail] = Field(default_factory=list)
    comments: List[CommentDetail] = Field(default_factory=list)
    tags: List[PostTagDetail] = Field(default_factory=list)

    @classmethod
    def from_aggregate(cls, aggregate) -> "PostDetailWithRelations":
        base = PostDetail.model_validate(aggregate.post, from_attributes=True)
        return cls(
            **base.model_dump(),
            images=[ImageDetail.model_validate(i, from_attributes=True) for i in aggregate.images],
            comments=[
                CommentDetail.model_validate(c, from_attributes=True)
                for c in aggregate.comments
            ],
            tags=[PostTagDetail.model_validate(t, from_attributes=True) for t in aggregate.tags],
        )
