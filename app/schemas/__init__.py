"""Pydantic request/response schemas."""

from app.schemas.auth import AuthResponse, Credentials, CurrentUser
from app.schemas.common import CamelModel
from app.schemas.health import HealthResponse
from app.schemas.roles import ALL_ROLES, ELEVATED_ROLES, Role
from app.schemas.tweet import (
    AuthorSummary,
    EnrichedTweet,
    LikeToggleResponse,
    ReplyOut,
    RetweetToggleResponse,
    TweetContent,
    TweetDeleteResponse,
    TweetDetail,
    TweetRecord,
)
from app.schemas.user import (
    DeletedUser,
    FollowToggleResponse,
    ProfileUpdate,
    RoleUpdate,
    RoleUpdateResponse,
    UserDeleteResponse,
    UserProfile,
    UserSummary,
)

__all__ = [
    "ALL_ROLES",
    "AuthResponse",
    "AuthorSummary",
    "CamelModel",
    "Credentials",
    "CurrentUser",
    "DeletedUser",
    "ELEVATED_ROLES",
    "EnrichedTweet",
    "FollowToggleResponse",
    "HealthResponse",
    "LikeToggleResponse",
    "ProfileUpdate",
    "ReplyOut",
    "RetweetToggleResponse",
    "Role",
    "RoleUpdate",
    "RoleUpdateResponse",
    "TweetContent",
    "TweetDeleteResponse",
    "TweetDetail",
    "TweetRecord",
    "UserDeleteResponse",
    "UserProfile",
    "UserSummary",
]
