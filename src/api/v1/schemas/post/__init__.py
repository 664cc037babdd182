from api.v1.schemas.post.image_detail import ImageDetail
from api.v1.schemas.post.image_upload_data import ImageUploadData
from api.v1.schemas.post.post_create_request import PostCreateRequest
from api.v1.schemas.post.post_create_response import PostCreateResponse
from api.v1.schemas.post.post_detail import PostDetail, PostDetailWithRelations
from api.v1.schemas.post.post_id_request import PostIdRequest
from api.v1.schemas.post.post_tag_detail import PostTagDetail
from api.v1.schemas.post.post_update_request import PostUpdateRequest

__all__ = [
    "ImageDetail",
    "ImageUploadData",
    "PostCreateRequest",
    "PostCreateResponse",
    "PostDetail",
    "PostDetailWithRelations",
    "PostIdRequest",
    "PostTagDetail",
    "PostUpdateRequest",
]
