from datetime import datetime
from pydantic import BaseModel


class UserResponse(BaseModel):
    id: str
    email: str
    name: str | None
    avatar_url: str | None
    created_at: datetime

    class Config:
        from_attributes = True


class SessionClaims(BaseModel):
    """Claims carried by the session token. exp is Unix seconds."""
    userId: str
    email: str
    exp: int


class GoogleSignInRequest(BaseModel):
    id_token: str | None = None


class SignedInUser(BaseModel):
    id: str
    email: str
    name: str | None = None


class SignInResponse(BaseModel):
    token: str
    user: SignedInUser
