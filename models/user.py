# models/user.py

from typing import Any, Mapping, Optional
from datetime import datetime, timezone
from pydantic import BaseModel, EmailStr

from models.enums import Role


# ===============================================================
# ARCHIVE USER MODELS
# ===============================================================

class User(BaseModel):
    """
    Account as seen by the archive: profile row plus its role.
    """
    id: str
    name: str
    email: EmailStr
    role: Role
    avatar: Optional[str] = None
    is_active: bool = True
    last_login: Optional[datetime] = None
    created_at: Optional[datetime] = None

    @classmethod
    def from_profile(cls, profile: Mapping[str, Any]) -> "User":
        """
        Build a User from a stored profile row.

        - avatar_url → avatar
        - the account is active unless isActive/is_active is explicitly False
        - a missing last login defaults to now
        """
        active_flag = profile.get("isActive", profile.get("is_active"))
        last_login = profile.get("lastLogin") or profile.get("last_login")

        return cls(
            id=profile["id"],
            name=profile["name"],
            email=profile["email"],
            role=profile["role"],
            avatar=profile.get("avatar_url"),
            is_active=active_flag is not False,
            last_login=last_login or datetime.now(timezone.utc),
            created_at=profile.get("created_at"),
        )
