from .user import User
from .post import Post
from .image import Image
from .comment import Comment
from .like import Like
from .tag import Tag
from .post_tag import PostTag

# 这一行是为了让 Alembic/SQLModel 能够发现所有模型
__all__ = [
    "User",
    "Post",
    "Image",
    "Comment",
    "Like",
    "Tag",
    "PostTag",
]
