"""The fixed role enumeration used for authorization."""

from enum import Enum


class Role(str, Enum):
    USER = "user"
    EDITOR = "editor"
    ADMIN = "admin"


ALL_ROLES = (Role.USER, Role.EDITOR, Role.ADMIN)
ELEVATED_ROLES = (Role.EDITOR, Role.ADMIN)
