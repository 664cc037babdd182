from datetime import datetime, timezone
from typing import Optional

from sqlmodel import Field, Index, SQLModel


class Like(SQLModel, table=True):
    """点赞记录，每个 (post_id, user_id) 最多一条，由切换逻辑保证"""

    __tablename__ = "likes"  # type: ignore
    __table_args__ = (Index("ix_likes_post_user", "post_id", "user_id"),)

    id: Optional[int] = Field(default=None, primary_key=True)
    post_id: int
    user_id: int
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
