"""Register/login endpoints and the auth dependencies (get_current_user, role and ownership gates)."""

from collections.abc import Callable, Iterable
from typing import Annotated

import jwt
from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pydantic import ValidationError
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.security import (
    PASSWORD_MAX_LEN,
    PASSWORD_MIN_LEN,
    USERNAME_MAX_LEN,
    USERNAME_MIN_LEN,
    create_access_token,
    decode_access_token,
)
from app.models import User
from app.schemas.auth import AuthResponse, Credentials, CurrentUser
from app.schemas.roles import Role
from app.services import users as user_service

router = APIRouter()
security = HTTPBearer(auto_error=False)

SessionDep = Annotated[Session, Depends(get_db)]
BearerDep = Annotated[HTTPAuthorizationCredentials | None, Depends(security)]


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def _identity_from_token(token: str) -> CurrentUser:
    """Decode a bearer token into an identity. Raises 401 if invalid, expired or malformed."""
    try:
        payload = decode_access_token(token)
    except jwt.PyJWTError:
        raise _unauthorized("Invalid or expired token")
    try:
        return CurrentUser(
            id=payload.get("id"),
            username=payload.get("username"),
            role=payload.get("role"),
        )
    except ValidationError:
        raise _unauthorized("Invalid token payload")


def get_current_user(credentials: BearerDep) -> CurrentUser:
    """
    Dependency: require a valid Bearer JWT and return the identity it carries.

    The identity is taken from the token alone; it is not checked against the
    stored user, so role changes and deletions apply once the token expires.
    """
    if credentials is None:
        raise _unauthorized("Access token required")
    return _identity_from_token(credentials.credentials)


def get_optional_user(credentials: BearerDep) -> CurrentUser | None:
    """Dependency for public reads: the identity if a valid token is sent, else None."""
    if credentials is None:
        return None
    try:
        return _identity_from_token(credentials.credentials)
    except HTTPException:
        return None


CurrentUserDep = Annotated[CurrentUser, Depends(get_current_user)]
OptionalUserDep = Annotated[CurrentUser | None, Depends(get_optional_user)]


def _forbidden() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_403_FORBIDDEN,
        detail="Insufficient permissions",
    )


def require_roles(*allowed_roles: Role) -> Callable[..., CurrentUser]:
    """Dependency factory: 403 unless the authenticated role is in `allowed_roles`."""
    allowed = frozenset(allowed_roles)

    def dependency(current_user: CurrentUserDep) -> CurrentUser:
        if current_user.role not in allowed:
            raise _forbidden()
        return current_user

    return dependency


def require_owner_or_roles(
    allowed_roles: Iterable[Role],
    resolve_owner: Callable[..., int | None],
) -> Callable[..., CurrentUser]:
    """
    Dependency factory: allow elevated roles, or the owner of the resource.

    `resolve_owner` is itself a dependency (it may take path params and a
    session) returning the owning user id, or None when the resource does not
    exist. In that case the request is let through so the handler answers 404.
    """
    allowed = frozenset(allowed_roles)

    def dependency(
        current_user: CurrentUserDep,
        owner_id: Annotated[int | None, Depends(resolve_owner)],
    ) -> CurrentUser:
        if current_user.role in allowed:
            return current_user
        if owner_id is None or owner_id == current_user.id:
            return current_user
        raise _forbidden()

    return dependency


require_admin = require_roles(Role.ADMIN)
AdminDep = Annotated[CurrentUser, Depends(require_admin)]


def _bad_request(detail: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


def _validate_registration(username: str, password: str) -> None:
    if len(username) < USERNAME_MIN_LEN:
        raise _bad_request(f"Username must be at least {USERNAME_MIN_LEN} characters long")
    if len(username) > USERNAME_MAX_LEN:
        raise _bad_request(f"Username must be at most {USERNAME_MAX_LEN} characters long")
    if len(password) < PASSWORD_MIN_LEN:
        raise _bad_request(f"Password must be at least {PASSWORD_MIN_LEN} characters long")
    if len(password) > PASSWORD_MAX_LEN:
        raise _bad_request(f"Password must be at most {PASSWORD_MAX_LEN} characters long")


def _auth_response(message: str, user: User) -> AuthResponse:
    token = create_access_token(user_id=user.id, username=user.username, role=user.role)
    return AuthResponse(
        message=message,
        token=token,
        user=CurrentUser(id=user.id, username=user.username, role=user.role),
    )


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(body: Credentials, db: SessionDep) -> AuthResponse:
    """
    Create an account with role 'user' and return a token for it.
    Include the token in the Authorization header as: Bearer <token>
    """
    if not body.username or not body.password:
        raise _bad_request("Username and password are required")
    _validate_registration(body.username, body.password)

    try:
        user = user_service.register_user(db, body.username, body.password)
    except user_service.UsernameTaken as e:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Username already exists",
        ) from e
    return _auth_response("User registered successfully", user)


@router.post("/login", response_model=AuthResponse)
def login(body: Credentials, db: SessionDep) -> AuthResponse:
    """Authenticate with username and password; returns a JWT access token."""
    if not body.username or not body.password:
        raise _bad_request("Username and password are required")

    user = user_service.authenticate(db, body.username, body.password)
    if user is None:
        raise _unauthorized("Invalid credentials")
    return _auth_response("Login successful", user)


@router.get("/me", response_model=CurrentUser)
def me(current_user: CurrentUserDep) -> CurrentUser:
    """Identity carried by the caller's token."""
    return current_user
