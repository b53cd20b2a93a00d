"""Tweet endpoints: timeline, detail, create (with images), edit, delete, like, retweet, reply."""

import asyncio
import json
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Request, UploadFile, status
from pydantic import ValidationError
from sqlalchemy.orm import Session

from app.api.auth import (
    CurrentUserDep,
    OptionalUserDep,
    SessionDep,
    require_owner_or_roles,
    require_roles,
)
from app.core.config import get_settings
from app.models import Tweet
from app.schemas.auth import CurrentUser
from app.schemas.roles import ALL_ROLES, ELEVATED_ROLES
from app.schemas.tweet import (
    EnrichedTweet,
    LikeToggleResponse,
    ReplyOut,
    RetweetToggleResponse,
    TweetContent,
    TweetDeleteResponse,
    TweetDetail,
)
from app.services import engagement
from app.services import tweets as tweet_service
from app.services.tweets import TWEET_MAX_LEN
from app.services.uploads import UploadRejected, save_images

router = APIRouter()


def _validate_content(content: str | None, kind: str = "Tweet") -> str:
    """Return the content if it is non-blank and within the length limit, else raise 400."""
    if content is None or not content.strip():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"{kind} content is required",
        )
    if len(content) > TWEET_MAX_LEN:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"{kind} content must be {TWEET_MAX_LEN} characters or less",
        )
    return content


def _get_tweet_or_404(db: Session, tweet_id: int) -> Tweet:
    tweet = tweet_service.get_tweet(db, tweet_id)
    if tweet is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Tweet not found")
    return tweet


def tweet_owner(tweet_id: int, db: SessionDep) -> int | None:
    """Owner resolver for the ownership gate on /tweets/{tweet_id}."""
    return tweet_service.get_tweet_owner(db, tweet_id)


OwnerOrEditorDep = Annotated[
    CurrentUser,
    Depends(require_owner_or_roles(ELEVATED_ROLES, tweet_owner)),
]
PosterDep = Annotated[CurrentUser, Depends(require_roles(*ALL_ROLES))]


def _is_upload_file(obj: object) -> bool:
    """True if obj is an uploaded file (UploadFile or file-like with filename and read)."""
    if isinstance(obj, UploadFile):
        return True
    return (
        hasattr(obj, "read")
        and callable(getattr(obj, "read", None))
        and hasattr(obj, "filename")
    )


async def _read_submission(request: Request) -> tuple[str | None, list[UploadFile]]:
    """Read tweet content and image files from a JSON or multipart request."""
    content_type = request.headers.get("content-type", "").split(";")[0].strip().lower()
    if content_type == "multipart/form-data":
        form = await request.form()
        content = form.get("content")
        files = [f for f in form.getlist("images") if _is_upload_file(f)]
        return (content if isinstance(content, str) else None), files
    try:
        body = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=f"Invalid JSON: {e!s}") from e
    if not isinstance(body, dict):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="JSON body must be an object.")
    try:
        return TweetContent.model_validate(body).content, []
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Tweet content must be a string") from e


@router.get("", response_model=list[EnrichedTweet])
def list_tweets(db: SessionDep, viewer: OptionalUserDep) -> list[EnrichedTweet]:
    """All tweets, newest first, with live counts and the caller's like/retweet flags."""
    return tweet_service.list_tweets(db, viewer.id if viewer else None)


@router.get("/{tweet_id}", response_model=TweetDetail)
def get_tweet(tweet_id: int, db: SessionDep, viewer: OptionalUserDep) -> TweetDetail:
    tweet = _get_tweet_or_404(db, tweet_id)
    return tweet_service.tweet_detail(db, tweet, viewer.id if viewer else None)


@router.post("", response_model=EnrichedTweet, status_code=status.HTTP_201_CREATED)
async def create_tweet(request: Request, db: SessionDep, current_user: PosterDep) -> EnrichedTweet:
    """
    Create a tweet from a JSON body `{content}` or from multipart form data
    with a `content` field and up to four `images` files.
    """
    content, files = await _read_submission(request)
    content = _validate_content(content)
    images: list[str] = []
    if files:
        try:
            images = await save_images(files, get_settings())
        except UploadRejected as e:
            raise HTTPException(status_code=e.status_code, detail=e.message) from e

    def persist() -> EnrichedTweet:
        tweet = tweet_service.create_tweet(
            db,
            user_id=current_user.id,
            username=current_user.username,
            content=content,
            images=images,
        )
        return tweet_service.enrich_tweet(db, tweet, current_user.id)

    # Store calls block; keep them off the event loop.
    return await asyncio.to_thread(persist)


@router.put("/{tweet_id}", response_model=EnrichedTweet)
def update_tweet(
    tweet_id: int,
    body: TweetContent,
    db: SessionDep,
    current_user: OwnerOrEditorDep,
) -> EnrichedTweet:
    """Edit a tweet's text. Allowed for its author, editors and admins."""
    content = _validate_content(body.content)
    tweet = _get_tweet_or_404(db, tweet_id)
    tweet = tweet_service.update_tweet(db, tweet, content)
    return tweet_service.enrich_tweet(db, tweet, current_user.id)


@router.delete("/{tweet_id}", response_model=TweetDeleteResponse)
def delete_tweet(tweet_id: int, db: SessionDep, _user: OwnerOrEditorDep) -> TweetDeleteResponse:
    """Delete a tweet with its likes, retweets and replies."""
    tweet = _get_tweet_or_404(db, tweet_id)
    record = tweet_service.delete_tweet(db, tweet)
    return TweetDeleteResponse(message="Tweet deleted successfully", tweet=record)


@router.post("/{tweet_id}/like", response_model=LikeToggleResponse)
def toggle_like(tweet_id: int, db: SessionDep, current_user: CurrentUserDep) -> LikeToggleResponse:
    _get_tweet_or_404(db, tweet_id)
    liked, count = engagement.toggle_like(db, tweet_id, current_user.id)
    return LikeToggleResponse(liked=liked, likes_count=count)


@router.post("/{tweet_id}/retweet", response_model=RetweetToggleResponse)
def toggle_retweet(tweet_id: int, db: SessionDep, current_user: CurrentUserDep) -> RetweetToggleResponse:
    _get_tweet_or_404(db, tweet_id)
    retweeted, count = engagement.toggle_retweet(db, tweet_id, current_user.id)
    return RetweetToggleResponse(retweeted=retweeted, retweets_count=count)


@router.post("/{tweet_id}/reply", response_model=ReplyOut, status_code=status.HTTP_201_CREATED)
def reply(
    tweet_id: int,
    body: TweetContent,
    db: SessionDep,
    current_user: CurrentUserDep,
) -> ReplyOut:
    tweet = _get_tweet_or_404(db, tweet_id)
    content = _validate_content(body.content, kind="Reply")
    created = tweet_service.add_reply(
        db,
        tweet,
        user_id=current_user.id,
        username=current_user.username,
        content=content,
    )
    return tweet_service.enrich_reply(db, created)
