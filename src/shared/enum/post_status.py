from enum import Enum


class PostStatus(str, Enum):
    """帖子状态：草稿与已发布之间可以互相切换"""

    DRAFT = "draft"
    PUBLISHED = "published"
