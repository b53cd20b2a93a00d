"""Request/response schemas for auth endpoints."""

from pydantic import Field

from app.schemas.common import CamelModel
from app.schemas.roles import Role


class Credentials(CamelModel):
    """Username and password for register and login.

    Both are optional here so missing fields produce the endpoint's own 400
    message rather than a generic validation error.
    """

    username: str | None = Field(default=None, description="Username")
    password: str | None = Field(default=None, description="Password")


class CurrentUser(CamelModel):
    """Identity decoded from a bearer token (id, username, role at issuance)."""

    id: int
    username: str
    role: Role


class AuthResponse(CamelModel):
    """Token and identity returned after register or login."""

    message: str
    token: str = Field(..., description="JWT access token")
    user: CurrentUser
