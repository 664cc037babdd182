from datetime import datetime, timezone
from typing import Optional

from sqlmodel import Field, Index, SQLModel


class PostTag(SQLModel, table=True):
    """帖子和标签的多对多关联表模型。"""

    __tablename__ = "post_tags"  # type: ignore
    __table_args__ = (Index("ix_post_tags_post_tag", "post_id", "tag_id"),)

    id: Optional[int] = Field(default=None, primary_key=True)
    post_id: int
    tag_id: int
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
