"""ORM model for application users (auth, RBAC and public profile)."""

from sqlalchemy import Boolean, Column, Integer, String, Text

from app.models.base import Base, UTCDateTime, utcnow


class User(Base):
    """
    User account for JWT authentication, role-based access control and profile.

    role: 'user', 'editor' or 'admin'

    tweets_count is a denormalized counter kept in step with tweet creation and
    deletion; responses always recount from the tweets table instead.
    """

    __tablename__ = "users"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(50), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(String(32), nullable=False, default="user")

    display_name = Column(String(50), nullable=True)
    bio = Column(Text, nullable=True)
    location = Column(String(30), nullable=True)
    website = Column(String(100), nullable=True)
    avatar = Column(String(1024), nullable=True)
    banner = Column(String(1024), nullable=True)
    verified = Column(Boolean, nullable=False, default=False)

    tweets_count = Column(Integer, nullable=False, default=0)

    created_at = Column(UTCDateTime(), nullable=False, default=utcnow)
    updated_at = Column(UTCDateTime(), nullable=True)
