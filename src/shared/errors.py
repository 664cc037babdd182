"""业务层抛出的类型化错误，由路由层转换为 HTTP 响应。"""

from fastapi import status


class ServiceError(Exception):
    """所有业务错误的基类。"""

    status_code: int = status.HTTP_400_BAD_REQUEST
    default_message: str = "Request failed"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class AlreadyRegisteredError(ServiceError):
    status_code = status.HTTP_409_CONFLICT
    default_message = "Email already registered"


class AlreadyTakenError(ServiceError):
    status_code = status.HTTP_409_CONFLICT
    default_message = "Username already taken"


class InvalidCredentialsError(ServiceError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Invalid credentials"


class AuthenticationRequiredError(ServiceError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Please login"


class UnauthorizedError(ServiceError):
    """调用者不是资源的所有者。"""

    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Unauthorized"


class DatabaseUnavailableError(ServiceError):
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    default_message = "Database not available"


class StorageError(ServiceError):
    status_code = status.HTTP_502_BAD_GATEWAY
    default_message = "Storage upload failed"
