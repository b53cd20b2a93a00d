"""ORM model for follow edges between users."""

from sqlalchemy import Column, ForeignKey, Integer, UniqueConstraint

from app.models.base import Base, UTCDateTime, utcnow


class Follow(Base):
    """follower_id follows following_id. Self-follows are rejected before insert."""

    __tablename__ = "follows"
    __table_args__ = (
        UniqueConstraint("follower_id", "following_id", name="uq_follows_pair"),
        {"sqlite_autoincrement": True},
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    follower_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    following_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    created_at = Column(UTCDateTime(), nullable=False, default=utcnow)
