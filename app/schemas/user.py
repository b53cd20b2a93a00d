"""Request/response schemas for user profiles and admin user management."""

from datetime import datetime

from pydantic import Field

from app.schemas.common import CamelModel
from app.schemas.roles import Role
from app.schemas.tweet import EnrichedTweet


class UserSummary(CamelModel):
    """User entry for admin views (no password hash)."""

    id: int
    username: str
    display_name: str | None = None
    role: Role
    bio: str | None = None
    location: str | None = None
    website: str | None = None
    avatar: str | None = None
    verified: bool = False
    followers_count: int = 0
    following_count: int = 0
    tweets_count: int = 0
    created_at: datetime
    updated_at: datetime | None = None


class UserProfile(CamelModel):
    """Public profile with live counters and the user's tweets, newest first."""

    id: int
    username: str
    display_name: str | None = None
    bio: str | None = None
    location: str | None = None
    website: str | None = None
    avatar: str | None = None
    banner: str | None = None
    verified: bool = False
    followers_count: int = 0
    following_count: int = 0
    tweets_count: int = 0
    created_at: datetime
    is_following: bool = False
    tweets: list[EnrichedTweet] = Field(default_factory=list)


class ProfileUpdate(CamelModel):
    """Editable profile fields; omitted fields are left unchanged."""

    display_name: str | None = Field(default=None, max_length=50)
    bio: str | None = Field(default=None, max_length=160)
    location: str | None = Field(default=None, max_length=30)
    website: str | None = Field(default=None, max_length=100)
    avatar: str | None = Field(default=None, max_length=1024)
    banner: str | None = Field(default=None, max_length=1024)


class RoleUpdate(CamelModel):
    # Plain string so an unknown role gets the endpoint's 400 message.
    role: str | None = None


class RoleUpdateResponse(CamelModel):
    message: str
    user: UserSummary


class DeletedUser(CamelModel):
    id: int
    username: str
    display_name: str | None = None
    role: Role


class UserDeleteResponse(CamelModel):
    message: str
    user: DeletedUser


class FollowToggleResponse(CamelModel):
    following: bool
    followers_count: int
