from pydantic import BaseModel, Field


class UserCreateIn(BaseModel):
    name: str = Field(..., description="Display name of the user")
    email: str = Field(..., description="The email of the user")
    password: str = Field(..., description="The password of the user")


class UserUpdateIn(BaseModel):
    name: str | None = Field(default=None, description="New display name")
    email: str | None = Field(default=None, description="New email")
    password: str | None = Field(
        default=None, description="New password; omit to keep the current one"
    )


class LoginIn(BaseModel):
    remember_me: bool = Field(default=False, description="Keep me logged in")
