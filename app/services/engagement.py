"""Derived counts and on/off toggles for likes, retweets and follows.

Counts are never read from denormalized columns; each call recounts the
relationship table. A toggle removes the (subject, actor) row if present and
inserts it otherwise, then reports the new state with a fresh count.
"""

import logging

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.database import store_write
from app.models import Follow, Like, Reply, Retweet, Tweet

logger = logging.getLogger(__name__)


def _count(db: Session, column, value: int) -> int:
    return db.scalar(select(func.count(column)).where(column == value)) or 0


def count_likes(db: Session, tweet_id: int) -> int:
    return _count(db, Like.tweet_id, tweet_id)


def count_retweets(db: Session, tweet_id: int) -> int:
    return _count(db, Retweet.tweet_id, tweet_id)


def count_replies(db: Session, tweet_id: int) -> int:
    return _count(db, Reply.tweet_id, tweet_id)


def count_followers(db: Session, user_id: int) -> int:
    return _count(db, Follow.following_id, user_id)


def count_following(db: Session, user_id: int) -> int:
    return _count(db, Follow.follower_id, user_id)


def count_tweets(db: Session, user_id: int) -> int:
    return _count(db, Tweet.user_id, user_id)


def has_liked(db: Session, tweet_id: int, user_id: int | None) -> bool:
    """False for anonymous viewers."""
    if user_id is None:
        return False
    return _find(db, Like, tweet_id=tweet_id, user_id=user_id) is not None


def has_retweeted(db: Session, tweet_id: int, user_id: int | None) -> bool:
    if user_id is None:
        return False
    return _find(db, Retweet, tweet_id=tweet_id, user_id=user_id) is not None


def is_following(db: Session, follower_id: int | None, following_id: int) -> bool:
    if follower_id is None:
        return False
    return _find(db, Follow, follower_id=follower_id, following_id=following_id) is not None


def _find(db: Session, model, **pair: int):
    return db.query(model).filter_by(**pair).first()


def _toggle(db: Session, model, **pair: int) -> bool:
    """Remove the row for `pair` if it exists, insert it otherwise. Returns the new state.

    Callers hold the store lock; the unique constraint rejects a duplicate if not.
    """
    existing = _find(db, model, **pair)
    if existing is not None:
        db.delete(existing)
        db.commit()
        return False
    db.add(model(**pair))
    try:
        db.commit()
    except IntegrityError:
        # Unique constraint hit: the pair already exists, so the state is "on".
        db.rollback()
        logger.warning("Duplicate %s row rejected for %s", model.__tablename__, pair)
    return True


def toggle_like(db: Session, tweet_id: int, user_id: int) -> tuple[bool, int]:
    """Like or unlike a tweet; returns (liked, likes_count)."""
    with store_write(db):
        liked = _toggle(db, Like, tweet_id=tweet_id, user_id=user_id)
        return liked, count_likes(db, tweet_id)


def toggle_retweet(db: Session, tweet_id: int, user_id: int) -> tuple[bool, int]:
    """Retweet or undo it; returns (retweeted, retweets_count)."""
    with store_write(db):
        retweeted = _toggle(db, Retweet, tweet_id=tweet_id, user_id=user_id)
        return retweeted, count_retweets(db, tweet_id)


def toggle_follow(db: Session, follower_id: int, following_id: int) -> tuple[bool, int]:
    """Follow or unfollow; returns (following, followers_count of the followee).

    Raises ValueError for a self-follow.
    """
    if follower_id == following_id:
        raise ValueError("Cannot follow yourself")
    with store_write(db):
        following = _toggle(db, Follow, follower_id=follower_id, following_id=following_id)
        return following, count_followers(db, following_id)
