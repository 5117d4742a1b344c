from typing import Any, Iterable, Mapping, Optional
from fastapi import Depends, HTTPException, Request, status
from pydantic import BaseModel, ValidationError

from core.logging_config import logger


# ============================================================
# Current User Model (identity handed over by the auth layer)
# ============================================================
class CurrentUser(BaseModel):
    id: str
    email: str
    role: str                       # raw string; unknown roles get no permissions

    name: Optional[str] = None
    is_active: bool = True


def _coerce_user(raw: Any) -> CurrentUser:
    if isinstance(raw, CurrentUser):
        return raw

    if isinstance(raw, Mapping):
        data = dict(raw)
    else:
        data = {
            "id": getattr(raw, "id", None),
            "email": getattr(raw, "email", None),
            "role": getattr(raw, "role", None),
            "name": getattr(raw, "name", None),
            "is_active": getattr(raw, "is_active", True),
        }

    if data.get("role") is not None:
        data["role"] = str(data["role"])

    return CurrentUser.model_validate(data)


# ============================================================
# AUTH RESOLUTION
# The host's auth layer (Supabase session check) stores the
# authenticated user on request.state.user.
# ============================================================
def get_current_user(request: Request) -> CurrentUser:

    unauthorized = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Invalid or expired authentication token",
        headers={"WWW-Authenticate": "Bearer"},
    )

    raw = getattr(request.state, "user", None)
    if raw is None:
        raise unauthorized

    try:
        user = _coerce_user(raw)
    except ValidationError as e:
        logger.warning(f"Malformed authenticated user on request: {e.error_count()} error(s)")
        raise unauthorized

    if not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Account is deactivated",
        )

    return user


# ============================================================
# ROLE CHECKER (basic role list guard)
# ============================================================
def requires_role(allowed_roles: Iterable[str]):
    allowed = [str(r) for r in allowed_roles]

    def checker(current_user: CurrentUser = Depends(get_current_user)):
        if current_user.role not in allowed:
            logger.warning(f"Role '{current_user.role}' rejected; requires one of {allowed}")
            raise HTTPException(
                status_code=403,
                detail=f"Requires one of: {allowed}",
            )
        return current_user
    return checker


# ============================================================
# PERMISSION CHECK (DELEGATES TO permission_helpers)
# ============================================================
def requires_permission(permission: str):
    """
    Thin wrapper so routes can still import from dependencies.auth.
    Real RBAC logic lives in core.permission_helpers.
    """
    from core.permission_helpers import requires_permission as new_checker
    return new_checker(permission)
