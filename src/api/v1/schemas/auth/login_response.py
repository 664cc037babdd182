from pydantic import BaseModel, Field


class LoginResponse(BaseModel):
    success: bool = Field(default=True)
    user_id: int = Field(description="登录用户ID")
