from api.v1.schemas.comment.comment_create_request import CommentCreateRequest
from api.v1.schemas.comment.comment_delete_request import CommentDeleteRequest
from api.v1.schemas.comment.comment_detail import CommentDetail

__all__ = [
    "CommentCreateRequest",
    "CommentDeleteRequest",
    "CommentDetail",
]
