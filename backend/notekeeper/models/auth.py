from pydantic import BaseModel, Field, field_validator

from notekeeper.models.common import KEY_PATTERN
from notekeeper.utils.jwt_auth import RESERVED_CLAIMS


class RegisterRequest(BaseModel):
    user_id: str = Field(min_length=3, max_length=64, pattern=KEY_PATTERN)
    password: str = Field(min_length=8, max_length=128)
    role: str = Field(default="user", pattern=r"^[A-Za-z][A-Za-z0-9_-]{0,31}$")

    @field_validator("role")
    @classmethod
    def role_is_not_a_reserved_claim(cls, v: str) -> str:
        if v in RESERVED_CLAIMS:
            raise ValueError("role name is reserved")
        return v


class RegisterResponse(BaseModel):
    user_id: str
    role: str


class LoginRequest(BaseModel):
    user_id: str = Field(min_length=1, max_length=64)
    password: str = Field(min_length=1, max_length=128)


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"


class UserOut(BaseModel):
    user_id: str
    role: str
    created_at: str


class PasswordChange(BaseModel):
    password: str = Field(min_length=8, max_length=128)
