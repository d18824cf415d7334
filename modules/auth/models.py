"""
Authentication module data models.

These models define the data structures used by the auth module
and exposed to other modules through the interface.
"""

from typing import Optional
from pydantic import BaseModel, Field, EmailStr

from shared.models import Role


class SignUpResult(BaseModel):
    """Outcome of creating an account at the identity provider."""

    user_id: str = Field(..., description="Provider-assigned user ID")
    access_token: Optional[str] = Field(
        None, description="Session token, absent while email confirmation is pending"
    )


class RegisterRequest(BaseModel):
    """Request body for account registration."""

    email: EmailStr
    password: str = Field(..., min_length=6)
    username: str = Field(..., min_length=1, max_length=50)
    name: str = Field(..., min_length=1, max_length=100)


class LoginRequest(BaseModel):
    """Request body for password login."""

    email: EmailStr
    password: str = Field(..., min_length=1)


class TokenResponse(BaseModel):
    """Access token issued at login."""

    message: str = "Signed in successfully"
    access_token: str


class UserProfile(BaseModel):
    """
    Application profile of a user.

    The email comes from the identity provider; everything else is the
    application's own users row.
    """

    id: str = Field(..., description="User ID (UUID)")
    email: str = Field(default="", description="Email address")
    username: Optional[str] = Field(None, description="Unique username")
    name: Optional[str] = Field(None, description="Display name")
    role: Role = Field(default=Role.USER, description="Authorization role")
    profile_pic: Optional[str] = Field(None, description="Avatar URL")
    introduction: Optional[str] = Field(None, description="Short bio")


class ProfileUpdateRequest(BaseModel):
    """
    Changes to the caller's own profile.

    The username is fixed at registration. A blank name is ignored; an
    empty introduction clears it.
    """

    name: Optional[str] = Field(None, max_length=100, description="New display name")
    introduction: Optional[str] = Field(None, max_length=1000, description="New short bio")

    def to_patch(self) -> dict[str, str]:
        patch = {}
        if self.name is not None and self.name.strip():
            patch["name"] = self.name.strip()
        if self.introduction is not None:
            patch["introduction"] = self.introduction
        return patch
