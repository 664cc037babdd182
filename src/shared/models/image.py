from datetime import datetime, timezone
from typing import Optional

from sqlmodel import Field, SQLModel


class Image(SQLModel, table=True):
    """帖子配图，order 为上传顺序"""

    __tablename__ = "images"  # type: ignore

    id: Optional[int] = Field(default=None, primary_key=True)
    post_id: int = Field(index=True)
    url: str = Field(max_length=512)
    file_key: str = Field(max_length=512, description="对象存储中的 key")
    order: int = Field(default=0)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
