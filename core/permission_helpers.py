from fastapi import Depends
from typing import Any, FrozenSet, List, Mapping, Optional

from dependencies.auth import get_current_user, CurrentUser
from core.config import settings
from core.errors import permission_denied
from core.logging_config import logger
from core.permissions import get_role_permissions
from core.roles import ADMIN_MANAGEABLE_ROLES, ASSIGNABLE_ROLES_BY_ACTOR
from models.enums import Role, Permission


# -----------------------------------------------------
# Accessors: targets may be User / CurrentUser models
# or plain rows from the store
# -----------------------------------------------------
def _field(obj: Any, name: str) -> Any:
    if isinstance(obj, Mapping):
        return obj.get(name)
    return getattr(obj, name, None)


def _owner_id(document: Any) -> Optional[str]:
    if document is None or isinstance(document, str):
        return document
    owner = _field(document, "user_id")
    if owner is None and isinstance(document, Mapping):
        owner = document.get("userId")
    return owner


# -----------------------------------------------------
# Collect effective permissions (role-based only)
# -----------------------------------------------------
def get_effective_permissions(actor_role: Any) -> FrozenSet[str]:
    if actor_role is None:
        return frozenset()

    if Role.parse(actor_role) is None and settings.UNKNOWN_ROLE_WARNINGS:
        logger.warning(f"Unknown role '{actor_role}' resolved to no permissions")

    return get_role_permissions(actor_role)


# -----------------------------------------------------
# Permission evaluation
# -----------------------------------------------------
def has_permission(actor_role: Any, permission: Any) -> bool:
    """
    True iff `permission` is in the role's permission set.
    No role (None) and unknown roles have no permissions.
    """
    return str(permission) in get_effective_permissions(actor_role)


def is_role(actor_role: Any, role: Any) -> bool:
    if actor_role is None or role is None:
        return False
    return str(actor_role) == str(role)


# ============================================================
# USER / ROLE MANAGEMENT RULES
# ============================================================

def can_modify_role(actor_role: Any, target_current_role: Any) -> bool:
    """
    Headmaster may change anyone's role.
    Admin may only change editors and readers, never another
    admin or a headmaster.
    """
    actor = Role.parse(actor_role)
    if actor is Role.headmaster:
        return True
    if actor is Role.admin and Role.parse(target_current_role) in ADMIN_MANAGEABLE_ROLES:
        return True
    return False


def available_roles_for(actor_role: Any) -> List[Role]:
    """Roles the actor may assign; empty for editors, readers and unknown roles."""
    return list(ASSIGNABLE_ROLES_BY_ACTOR.get(Role.parse(actor_role), ()))


def can_edit_user(actor_role: Any, actor_id: Any, target: Any) -> bool:
    # A headmaster cannot edit (and so lock out) their own account
    if _field(target, "id") == actor_id and is_role(_field(target, "role"), Role.headmaster):
        return False
    return has_permission(actor_role, Permission.manage_users)


def can_delete_user(actor_role: Any, actor_id: Any, target: Any) -> bool:
    if _field(target, "id") == actor_id:
        return False
    if is_role(_field(target, "role"), Role.headmaster) and not is_role(actor_role, Role.headmaster):
        return False
    return has_permission(actor_role, Permission.manage_users)


def can_change_user_role(actor_role: Any, actor_id: Any, target: Any, new_role: Any) -> bool:
    """Full check for a role change: edit rights, target role, and the role being granted."""
    if not can_edit_user(actor_role, actor_id, target):
        return False
    if not can_modify_role(actor_role, _field(target, "role")):
        return False
    return Role.parse(new_role) in available_roles_for(actor_role)


# ============================================================
# DOCUMENT RULES
# ============================================================

def can_edit_document(actor_role: Any, actor_id: Any, document: Any) -> bool:
    """
    `document` is a Document, a store row, or the owner's user ID.
    """
    if has_permission(actor_role, Permission.edit_any_document):
        return True
    owner_id = _owner_id(document)
    return (
        has_permission(actor_role, Permission.edit_own_documents)
        and owner_id is not None
        and owner_id == actor_id
    )


def can_delete_document(actor_role: Any, actor_id: Any, document: Any) -> bool:
    if has_permission(actor_role, Permission.delete_any_document):
        return True
    owner_id = _owner_id(document)
    return (
        has_permission(actor_role, Permission.delete_own_documents)
        and owner_id is not None
        and owner_id == actor_id
    )


# -----------------------------------------------------
# FastAPI dependency wrapper
# -----------------------------------------------------
def requires_permission(permission: str):
    """
    Usage:
        @router.post("/", dependencies=[Depends(requires_permission("create_documents"))])
    """

    def dependency(current_user: CurrentUser = Depends(get_current_user)):
        if not has_permission(current_user.role, permission):
            logger.warning(f"User {current_user.id} ({current_user.role}) lacks '{permission}'")
            raise permission_denied(f"Insufficient permissions: '{permission}' required")
        return current_user

    return dependency


# ============================================================
# HANDLER-LEVEL GUARDS (raise 403 on denial)
# ============================================================

def require_user_edit(user: CurrentUser, target: Any):
    if not can_edit_user(user.role, user.id, target):
        raise permission_denied("You cannot edit this user")


def require_user_deletion(user: CurrentUser, target: Any):
    if not can_delete_user(user.role, user.id, target):
        raise permission_denied("You cannot delete this user")


def require_role_change(user: CurrentUser, target: Any, new_role: Any):
    if not can_change_user_role(user.role, user.id, target, new_role):
        logger.warning(
            f"Role change refused: {user.id} ({user.role}) tried to set "
            f"{_field(target, 'id')} to '{new_role}'"
        )
        raise permission_denied(f"You cannot assign role '{new_role}' to this user")


def require_document_edit(user: CurrentUser, document: Any):
    if not can_edit_document(user.role, user.id, document):
        raise permission_denied("You cannot edit this document")


def require_document_deletion(user: CurrentUser, document: Any):
    if not can_delete_document(user.role, user.id, document):
        raise permission_denied("You cannot delete this document")
