from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from taskboard.utils.sanitization import sanitize_string


class UserCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    password: str = Field(..., min_length=1)

    @field_validator("name", "email", mode="before")
    @classmethod
    def sanitize(cls, v):
        return sanitize_string(v)


class UserLogin(BaseModel):
    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)

    @field_validator("email", mode="before")
    @classmethod
    def sanitize(cls, v):
        return sanitize_string(v)


class UserSummary(BaseModel):
    id: str
    name: str
    email: str

    model_config = ConfigDict(from_attributes=True)


class UserResponse(UserSummary):
    avatar: str | None = None


class Token(BaseModel):
    token: str
    user: UserSummary
