"""SQLAlchemy ORM models."""

from app.models.base import Base
from app.models.follow import Follow
from app.models.tweet import Like, Reply, Retweet, Tweet
from app.models.user import User

__all__ = ["Base", "Follow", "Like", "Reply", "Retweet", "Tweet", "User"]
