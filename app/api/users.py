"""User endpoints: public profiles, follow toggle, own profile edit, admin user management."""

from fastapi import APIRouter, HTTPException, status
from sqlalchemy.orm import Session

from app.api.auth import AdminDep, CurrentUserDep, OptionalUserDep, SessionDep
from app.models import User
from app.schemas.roles import Role
from app.schemas.user import (
    DeletedUser,
    FollowToggleResponse,
    ProfileUpdate,
    RoleUpdate,
    RoleUpdateResponse,
    UserDeleteResponse,
    UserProfile,
    UserSummary,
)
from app.services import engagement
from app.services import users as user_service

router = APIRouter()


def _get_user_or_404(db: Session, user_id: int) -> User:
    user = user_service.get_user(db, user_id)
    if user is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return user


@router.get("", response_model=list[UserSummary])
def list_users(db: SessionDep, _admin: AdminDep) -> list[UserSummary]:
    """List all users (admin only), with counters recounted from follows and tweets."""
    return user_service.list_users(db)


@router.get("/profile/{username}", response_model=UserProfile)
def get_profile(username: str, db: SessionDep, viewer: OptionalUserDep) -> UserProfile:
    user = user_service.get_user_by_username(db, username)
    if user is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return user_service.user_profile(db, user, viewer.id if viewer else None)


@router.put("/me", response_model=UserProfile)
def update_my_profile(body: ProfileUpdate, db: SessionDep, current_user: CurrentUserDep) -> UserProfile:
    """Edit the caller's display name, bio, location, website, avatar or banner."""
    user = _get_user_or_404(db, current_user.id)
    user = user_service.update_profile(db, user, body)
    return user_service.user_profile(db, user, current_user.id)


@router.post("/{user_id}/follow", response_model=FollowToggleResponse)
def toggle_follow(user_id: int, db: SessionDep, current_user: CurrentUserDep) -> FollowToggleResponse:
    _get_user_or_404(db, user_id)
    if user_id == current_user.id:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Cannot follow yourself")
    following, count = engagement.toggle_follow(db, current_user.id, user_id)
    return FollowToggleResponse(following=following, followers_count=count)


@router.get("/{user_id}", response_model=UserSummary)
def get_user(user_id: int, db: SessionDep, _admin: AdminDep) -> UserSummary:
    return user_service.user_summary(db, _get_user_or_404(db, user_id))


@router.put("/{user_id}/role", response_model=RoleUpdateResponse)
def update_role(
    user_id: int,
    body: RoleUpdate,
    db: SessionDep,
    admin: AdminDep,
) -> RoleUpdateResponse:
    """
    Change a user's role (admin only). Admins cannot change their own role.
    The target's existing tokens keep the old role until they expire.
    """
    valid = [r.value for r in Role]
    if body.role not in valid:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Valid role is required (user, editor, or admin)",
        )
    user = _get_user_or_404(db, user_id)
    if user_id == admin.id:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Cannot change your own role")

    user = user_service.update_role(db, user, Role(body.role))
    return RoleUpdateResponse(
        message="User role updated successfully",
        user=user_service.user_summary(db, user),
    )


@router.delete("/{user_id}", response_model=UserDeleteResponse)
def delete_user(user_id: int, db: SessionDep, admin: AdminDep) -> UserDeleteResponse:
    """Delete a user with their tweets, engagement and follows (admin only, not yourself)."""
    if user_id == admin.id:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Cannot delete your own account")
    user = _get_user_or_404(db, user_id)
    deleted = DeletedUser.model_validate(user)
    user_service.delete_user(db, user)
    return UserDeleteResponse(message="User deleted successfully", user=deleted)
