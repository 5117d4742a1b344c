# ============================================
# CENTRALIZED ROLE → PERMISSIONS MAP
# ============================================
from types import MappingProxyType
from typing import Any, FrozenSet, Mapping

from models.enums import Role, Permission as P


_ROLE_PERMISSIONS = {

    # =====================================================
    # HEADMASTER: full access, system administration
    # =====================================================
    Role.headmaster: frozenset({
        P.view_admin_dashboard,
        P.manage_users,
        P.manage_system_settings,
        P.view_audit_logs,
        P.manage_backups,
        P.delete_any_document,
        P.edit_any_document,
        P.view_all_documents,
        P.create_documents,
        P.manage_categories,
        P.view_analytics,
        P.system_maintenance,
    }),

    # =====================================================
    # ADMIN: users, documents, analytics
    # =====================================================
    Role.admin: frozenset({
        P.manage_users,
        P.view_all_documents,
        P.edit_any_document,
        P.delete_any_document,
        P.create_documents,
        P.manage_categories,
        P.view_analytics,
    }),

    # =====================================================
    # EDITOR: only their own documents, plus categories
    # =====================================================
    Role.editor: frozenset({
        P.view_all_documents,
        P.create_documents,
        P.edit_own_documents,
        P.delete_own_documents,
        P.manage_categories,
    }),

    # =====================================================
    # READER: read-only
    # =====================================================
    Role.reader: frozenset({
        P.view_all_documents,
    }),
}

# Sets hold plain strings so any permission string can be looked up
ROLE_PERMISSIONS: Mapping[Role, FrozenSet[str]] = MappingProxyType({
    role: frozenset(p.value for p in perms)
    for role, perms in _ROLE_PERMISSIONS.items()
})

NO_PERMISSIONS: FrozenSet[str] = frozenset()


def get_role_permissions(role: Any) -> FrozenSet[str]:
    """Permission set of a role. Unknown roles have none."""
    parsed = Role.parse(role)
    if parsed is None:
        return NO_PERMISSIONS
    return ROLE_PERMISSIONS[parsed]
