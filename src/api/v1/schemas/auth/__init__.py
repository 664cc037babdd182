from api.v1.schemas.auth.login_request import LoginRequest
from api.v1.schemas.auth.login_response import LoginResponse
from api.v1.schemas.auth.register_request import RegisterRequest

__all__ = [
    "LoginRequest",
    "LoginResponse",
    "RegisterRequest",
]
