"""API routes."""

from fastapi import APIRouter

from app.api import auth, health, tweets, users

router = APIRouter()
router.include_router(health.router, prefix="/health", tags=["health"])
router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(tweets.router, prefix="/tweets", tags=["tweets"])
router.include_router(users.router, prefix="/users", tags=["users"])
