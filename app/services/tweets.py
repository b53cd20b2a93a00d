"""Tweet lookups, mutations and read-time enrichment."""

import logging

from sqlalchemy.orm import Session

from app.core.database import store_write
from app.models import Like, Reply, Retweet, Tweet, User
from app.models.base import utcnow
from app.schemas.tweet import (
    AuthorSummary,
    EnrichedTweet,
    ReplyOut,
    TweetDetail,
    TweetRecord,
)
from app.services import engagement

logger = logging.getLogger(__name__)

TWEET_MAX_LEN = 280


def author_summary(db: Session, user_id: int) -> AuthorSummary | None:
    """Author fields for embedding; None when the user no longer exists."""
    author = db.get(User, user_id)
    if author is None:
        return None
    return AuthorSummary.model_validate(author)


def enrich_tweet(db: Session, tweet: Tweet, viewer_id: int | None = None) -> EnrichedTweet:
    """Attach author, viewer flags and counts recomputed from the engagement tables."""
    record = TweetRecord.model_validate(tweet)
    return EnrichedTweet(
        **record.model_dump(),
        author=author_summary(db, tweet.user_id),
        user_liked=engagement.has_liked(db, tweet.id, viewer_id),
        user_retweeted=engagement.has_retweeted(db, tweet.id, viewer_id),
        likes_count=engagement.count_likes(db, tweet.id),
        retweets_count=engagement.count_retweets(db, tweet.id),
        replies_count=engagement.count_replies(db, tweet.id),
    )


def enrich_reply(db: Session, reply: Reply) -> ReplyOut:
    return ReplyOut(
        id=reply.id,
        tweet_id=reply.tweet_id,
        user_id=reply.user_id,
        username=reply.username,
        content=reply.content,
        timestamp=reply.timestamp,
        author=author_summary(db, reply.user_id),
    )


def get_tweet(db: Session, tweet_id: int) -> Tweet | None:
    return db.get(Tweet, tweet_id)


def get_tweet_owner(db: Session, tweet_id: int) -> int | None:
    """Owning user id of a tweet, or None if the tweet does not exist."""
    tweet = db.get(Tweet, tweet_id)
    return tweet.user_id if tweet is not None else None


def list_tweets(db: Session, viewer_id: int | None = None) -> list[EnrichedTweet]:
    """Every tweet, newest first."""
    tweets = db.query(Tweet).order_by(Tweet.timestamp.desc(), Tweet.id.desc()).all()
    return [enrich_tweet(db, t, viewer_id) for t in tweets]


def list_user_tweets(db: Session, user_id: int, viewer_id: int | None = None) -> list[EnrichedTweet]:
    tweets = (
        db.query(Tweet)
        .filter(Tweet.user_id == user_id)
        .order_by(Tweet.timestamp.desc(), Tweet.id.desc())
        .all()
    )
    return [enrich_tweet(db, t, viewer_id) for t in tweets]


def tweet_detail(db: Session, tweet: Tweet, viewer_id: int | None = None) -> TweetDetail:
    """Enriched tweet plus its flat reply list."""
    replies = (
        db.query(Reply)
        .filter(Reply.tweet_id == tweet.id)
        .order_by(Reply.timestamp, Reply.id)
        .all()
    )
    enriched = enrich_tweet(db, tweet, viewer_id)
    return TweetDetail(
        **enriched.model_dump(),
        replies=[enrich_reply(db, r) for r in replies],
    )


def create_tweet(
    db: Session,
    *,
    user_id: int,
    username: str,
    content: str,
    images: list[str] | None = None,
) -> Tweet:
    """Insert a tweet and bump the author's stored tweet counter."""
    tweet = Tweet(
        user_id=user_id,
        username=username,
        content=content.strip(),
        images=list(images or []),
        timestamp=utcnow(),
    )
    with store_write(db):
        db.add(tweet)
        author = db.get(User, user_id)
        if author is not None:
            author.tweets_count = (author.tweets_count or 0) + 1
        db.commit()
        db.refresh(tweet)
    logger.info("Tweet created: id=%s user_id=%s images=%s", tweet.id, user_id, len(tweet.images))
    return tweet


def update_tweet(db: Session, tweet: Tweet, content: str) -> Tweet:
    with store_write(db):
        tweet.content = content.strip()
        tweet.updated_at = utcnow()
        db.commit()
        db.refresh(tweet)
    logger.info("Tweet updated: id=%s", tweet.id)
    return tweet


def delete_tweet(db: Session, tweet: Tweet, commit: bool = True) -> TweetRecord:
    """
    Delete a tweet and every like, retweet and reply that references it.

    The author's stored tweet counter is decremented, never below zero.
    With commit=False the deletes are left pending in the caller's transaction.
    Returns the deleted tweet's stored fields.
    """
    record = TweetRecord.model_validate(tweet)
    with store_write(db):
        author = db.get(User, tweet.user_id)
        if author is not None and (author.tweets_count or 0) > 0:
            author.tweets_count -= 1

        likes = db.query(Like).filter(Like.tweet_id == tweet.id).delete(synchronize_session=False)
        retweets = db.query(Retweet).filter(Retweet.tweet_id == tweet.id).delete(synchronize_session=False)
        replies = db.query(Reply).filter(Reply.tweet_id == tweet.id).delete(synchronize_session=False)
        db.delete(tweet)
        if commit:
            db.commit()

    logger.info(
        "Tweet deleted: id=%s likes=%s retweets=%s replies=%s",
        record.id,
        likes,
        retweets,
        replies,
    )
    return record


def add_reply(db: Session, tweet: Tweet, *, user_id: int, username: str, content: str) -> Reply:
    reply = Reply(
        tweet_id=tweet.id,
        user_id=user_id,
        username=username,
        content=content.strip(),
        timestamp=utcnow(),
    )
    with store_write(db):
        db.add(reply)
        db.commit()
        db.refresh(reply)
    logger.info("Reply created: id=%s tweet_id=%s user_id=%s", reply.id, tweet.id, user_id)
    return reply
