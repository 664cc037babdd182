from datetime import datetime, timezone
from typing import Optional

from sqlmodel import Field, SQLModel


class Tag(SQLModel, table=True):
    """标签模型。"""

    __tablename__ = "tags"  # type: ignore

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(max_length=20, unique=True, index=True)
    usage_count: int = Field(default=0, description="引用该标签的 PostTag 数量")
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
