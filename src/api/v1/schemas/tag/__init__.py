from api.v1.schemas.tag.tag_detail import TagDetail

__all__ = [
    "TagDetail",
]
