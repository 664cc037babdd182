from typing import Generic, List, TypeVar

from pydantic import BaseModel, Field

DataType = TypeVar("DataType")


class PaginatedResponse(BaseModel, Generic[DataType]):
    """
    标准分页响应模型
    """

    total: int = Field(description="符合条件的总项目数")
    limit: int = Field(description="本次查询每页的项目数")
    offset: int = Field(description="本次查询的偏移量")
    results: List[DataType]


class SuccessResponse(BaseModel):
    success: bool = Field(default=True, description="操作是否成功")


def page_to_offset(page: int, limit: int) -> int:
    """页码从 1 开始"""
    return (page - 1) * limit
