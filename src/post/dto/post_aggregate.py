from dataclasses import dataclass, field
from typing import List

from shared.models import Comment, Image, Post, PostTag


@dataclass
class PostAggregate:
    """帖子详情：帖子本身及其图片、评论、标签关联"""

    post: Post
    images: List[Image] = field(default_factory=list)
    comments: List[Comment] = field(default_factory=list)
    tags: List[PostTag] = field(default_factory=list)
