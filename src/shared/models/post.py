from datetime import datetime, timezone
from typing import Optional

from sqlmodel import Field, SQLModel

from shared.enum.post_status import PostStatus


class Post(SQLModel, table=True):
    """帖子模型。"""

    __tablename__ = "posts"  # type: ignore

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(index=True, description="作者用户ID")
    title: str = Field(max_length=100)
    content: str
    status: PostStatus = Field(default=PostStatus.DRAFT, index=True)

    # 计数字段只做增减维护，不重新统计
    like_count: int = Field(default=0)
    comment_count: int = Field(default=0)

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc), nullable=False, index=True
    )
    updated_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        sa_column_kwargs={"onupdate": lambda: datetime.now(timezone.utc)},
    )
