from pydantic import BaseModel, Field


class ImageUploadData(BaseModel):
    """随帖子一起上传的图片"""

    data: str = Field(description="Base64 编码的图片内容")
    filename: str = Field(min_length=1, max_length=255, description="文件名")
