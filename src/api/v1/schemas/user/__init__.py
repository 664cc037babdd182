from api.v1.schemas.user.update_profile_request import UpdateProfileRequest
from api.v1.schemas.user.user_profile import UserProfile

__all__ = [
    "UpdateProfileRequest",
    "UserProfile",
]
