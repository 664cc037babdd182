from pydantic import BaseModel, EmailStr, Field


class RegisterRequest(BaseModel):
    """邮箱注册请求"""

    email: EmailStr = Field(description="邮箱")
    password: str = Field(min_length=8, description="密码，至少 8 位")
    username: str = Field(min_length=3, max_length=20, description="用户名，3-20 位")
