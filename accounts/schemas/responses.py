from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field


class UserOut(BaseModel):
    id: str = Field(..., description="The id of the user")
    name: str = Field(..., description="The display name of the user")
    email: str = Field(..., description="The email of the user")
    activated: bool
    activated_at: datetime | None = None


class AcceptedOut(BaseModel):
    status: Literal["accepted"] = "accepted"
    email_sent: bool = True


class OkOut(BaseModel):
    status: Literal["ok"] = "ok"


class TokenOut(BaseModel):
    token: str
