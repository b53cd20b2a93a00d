"""Request/response schemas for tweets, replies and engagement toggles."""

from datetime import datetime

from pydantic import Field

from app.schemas.common import CamelModel


class TweetContent(CamelModel):
    """Body for creating or editing a tweet, or posting a reply."""

    content: str | None = Field(default=None, description="Text, at most 280 characters")


class AuthorSummary(CamelModel):
    """Author fields embedded in tweets and replies."""

    id: int
    username: str
    display_name: str | None = None
    avatar: str | None = None
    verified: bool = False


class TweetRecord(CamelModel):
    """Stored tweet fields, without derived engagement data."""

    id: int
    user_id: int
    username: str
    content: str
    images: list[str] = Field(default_factory=list)
    timestamp: datetime
    updated_at: datetime | None = None
    is_retweet: bool = False
    original_tweet_id: int | None = None
    reply_to_id: int | None = None


class EnrichedTweet(TweetRecord):
    """Tweet with author summary, requester flags and live counts."""

    author: AuthorSummary | None = None
    user_liked: bool = False
    user_retweeted: bool = False
    likes_count: int = 0
    retweets_count: int = 0
    replies_count: int = 0


class ReplyOut(CamelModel):
    """A reply with its author summary (null if the author was removed)."""

    id: int
    tweet_id: int
    user_id: int
    username: str
    content: str
    timestamp: datetime
    author: AuthorSummary | None = None


class TweetDetail(EnrichedTweet):
    """Single tweet with its flat reply list, oldest reply first."""

    replies: list[ReplyOut] = Field(default_factory=list)


class TweetDeleteResponse(CamelModel):
    message: str
    tweet: TweetRecord


class LikeToggleResponse(CamelModel):
    liked: bool
    likes_count: int


class RetweetToggleResponse(CamelModel):
    retweeted: bool
    retweets_count: int
