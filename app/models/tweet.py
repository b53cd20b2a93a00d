"""ORM models for tweets and their engagement rows (likes, retweets, replies)."""

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
)

from app.models.base import Base, UTCDateTime, utcnow


class Tweet(Base):
    """
    A user-authored post of at most 280 characters with up to four images.

    The *_count columns are placeholders written at creation time; like, retweet
    and reply counts are always recomputed from the engagement tables on read.
    """

    __tablename__ = "tweets"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    username = Column(String(50), nullable=False)
    content = Column(Text, nullable=False)
    images = Column(JSON, nullable=False, default=list)
    timestamp = Column(UTCDateTime(), nullable=False, default=utcnow, index=True)
    updated_at = Column(UTCDateTime(), nullable=True)

    likes_count = Column(Integer, nullable=False, default=0)
    retweets_count = Column(Integer, nullable=False, default=0)
    replies_count = Column(Integer, nullable=False, default=0)

    is_retweet = Column(Boolean, nullable=False, default=False)
    original_tweet_id = Column(Integer, nullable=True)
    reply_to_id = Column(Integer, nullable=True)


class Like(Base):
    """At most one like per (tweet, user)."""

    __tablename__ = "likes"
    __table_args__ = (
        UniqueConstraint("tweet_id", "user_id", name="uq_likes_tweet_user"),
        {"sqlite_autoincrement": True},
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    tweet_id = Column(Integer, ForeignKey("tweets.id"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    created_at = Column(UTCDateTime(), nullable=False, default=utcnow)


class Retweet(Base):
    """At most one retweet per (tweet, user)."""

    __tablename__ = "retweets"
    __table_args__ = (
        UniqueConstraint("tweet_id", "user_id", name="uq_retweets_tweet_user"),
        {"sqlite_autoincrement": True},
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    tweet_id = Column(Integer, ForeignKey("tweets.id"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    created_at = Column(UTCDateTime(), nullable=False, default=utcnow)


class Reply(Base):
    """Flat reply to a tweet; replies cannot themselves be replied to."""

    __tablename__ = "replies"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, autoincrement=True)
    tweet_id = Column(Integer, ForeignKey("tweets.id"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    username = Column(String(50), nullable=False)
    content = Column(Text, nullable=False)
    timestamp = Column(UTCDateTime(), nullable=False, default=utcnow)
