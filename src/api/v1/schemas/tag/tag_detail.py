from datetime import datetime

from pydantic import BaseModel, Field


class TagDetail(BaseModel):
    """标签详情"""

    id: int = Field(description="标签ID")
    name: str = Field(description="标签名")
    usage_count: int = Field(description="被帖子使用的次数")
    created_at: datetime = Field(description="创建时间")

    class Config:
        from_attributes = True
