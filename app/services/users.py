"""User accounts: registration, credential checks, profiles and admin actions."""

import logging

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.database import store_write
from app.core.security import hash_password, verify_password
from app.models import Follow, Like, Reply, Retweet, Tweet, User
from app.models.base import utcnow
from app.schemas.roles import Role
from app.schemas.user import ProfileUpdate, UserProfile, UserSummary
from app.services import engagement
from app.services.tweets import delete_tweet, list_user_tweets

logger = logging.getLogger(__name__)


class UsernameTaken(Exception):
    """Raised when registering a username that already exists."""


def get_user(db: Session, user_id: int) -> User | None:
    return db.get(User, user_id)


def get_user_by_username(db: Session, username: str) -> User | None:
    return db.query(User).filter(User.username == username).first()


def _new_user(username: str, password: str, role: Role, **profile: object) -> User:
    # Hashing is slow; it happens before the store lock is taken.
    return User(
        username=username,
        password_hash=hash_password(password),
        role=role.value,
        **profile,
    )


def create_user(
    db: Session,
    username: str,
    password: str,
    role: Role = Role.USER,
    **profile: object,
) -> User:
    """Insert a user with a bcrypt hash of `password`. Uniqueness is checked by the caller."""
    user = _new_user(username, password, role, **profile)
    with store_write(db):
        db.add(user)
        db.commit()
        db.refresh(user)
    logger.info("User created: id=%s username=%s role=%s", user.id, user.username, user.role)
    return user


def register_user(db: Session, username: str, password: str) -> User:
    """
    Create a base-role account. The existence check and the insert run as one
    unit; raises UsernameTaken if the name is already in use.
    """
    user = _new_user(username, password, Role.USER)
    with store_write(db):
        if get_user_by_username(db, username) is not None:
            raise UsernameTaken(username)
        db.add(user)
        try:
            db.commit()
        except IntegrityError as e:
            raise UsernameTaken(username) from e
        db.refresh(user)
    logger.info("User registered: id=%s username=%s", user.id, user.username)
    return user


def authenticate(db: Session, username: str, password: str) -> User | None:
    """Return the user if the credentials match, else None."""
    user = get_user_by_username(db, username)
    if user is None or not verify_password(password, user.password_hash):
        logger.info("Login failed for username=%s", username)
        return None
    return user


def user_summary(db: Session, user: User) -> UserSummary:
    """Admin view of a user with counters recomputed from the relationship tables."""
    return UserSummary(
        id=user.id,
        username=user.username,
        display_name=user.display_name,
        role=user.role,
        bio=user.bio,
        location=user.location,
        website=user.website,
        avatar=user.avatar,
        verified=user.verified,
        followers_count=engagement.count_followers(db, user.id),
        following_count=engagement.count_following(db, user.id),
        tweets_count=engagement.count_tweets(db, user.id),
        created_at=user.created_at,
        updated_at=user.updated_at,
    )


def list_users(db: Session) -> list[UserSummary]:
    users = db.query(User).order_by(User.id).all()
    return [user_summary(db, u) for u in users]


def user_profile(db: Session, user: User, viewer_id: int | None = None) -> UserProfile:
    """Public profile: live counters, follow flag for the viewer, tweets newest first."""
    tweets = list_user_tweets(db, user.id, viewer_id)
    return UserProfile(
        id=user.id,
        username=user.username,
        display_name=user.display_name,
        bio=user.bio,
        location=user.location,
        website=user.website,
        avatar=user.avatar,
        banner=user.banner,
        verified=user.verified,
        followers_count=engagement.count_followers(db, user.id),
        following_count=engagement.count_following(db, user.id),
        tweets_count=len(tweets),
        created_at=user.created_at,
        is_following=engagement.is_following(db, viewer_id, user.id),
        tweets=tweets,
    )


def update_profile(db: Session, user: User, changes: ProfileUpdate) -> User:
    with store_write(db):
        for field, value in changes.model_dump(exclude_unset=True).items():
            setattr(user, field, value)
        user.updated_at = utcnow()
        db.commit()
        db.refresh(user)
    logger.info("Profile updated: id=%s", user.id)
    return user


def update_role(db: Session, user: User, role: Role) -> User:
    with store_write(db):
        previous = user.role
        user.role = role.value
        user.updated_at = utcnow()
        db.commit()
        db.refresh(user)
    logger.info("Role changed: id=%s %s -> %s", user.id, previous, user.role)
    return user


def delete_user(db: Session, user: User) -> dict[str, int]:
    """
    Delete a user and everything that references them, in a single commit.

    Removes the user's tweets (each with its own likes, retweets and replies),
    the user's likes, retweets and replies on other tweets, and follow edges in
    both directions. If any step fails nothing is removed. Returns per-collection
    removal counts.
    """
    user_id, username = user.id, user.username
    with store_write(db):
        tweets = db.query(Tweet).filter(Tweet.user_id == user_id).all()
        for tweet in tweets:
            delete_tweet(db, tweet, commit=False)

        removed = {
            "tweets": len(tweets),
            "likes": db.query(Like).filter(Like.user_id == user_id).delete(synchronize_session=False),
            "retweets": db.query(Retweet)
            .filter(Retweet.user_id == user_id)
            .delete(synchronize_session=False),
            "replies": db.query(Reply).filter(Reply.user_id == user_id).delete(synchronize_session=False),
            "follows": db.query(Follow)
            .filter(or_(Follow.follower_id == user_id, Follow.following_id == user_id))
            .delete(synchronize_session=False),
        }
        db.delete(user)
        db.commit()
    logger.info("User deleted: id=%s username=%s removed=%s", user_id, username, removed)
    return removed
