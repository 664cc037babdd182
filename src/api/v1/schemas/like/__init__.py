from api.v1.schemas.like.like_status import LikeStatus
from api.v1.schemas.like.like_toggle_request import LikeToggleRequest

__all__ = [
    "LikeStatus",
    "LikeToggleRequest",
]
