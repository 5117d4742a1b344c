from enum import Enum
from typing import Any, Optional


class BaseStrEnum(str, Enum):
    """
    Base enum that serializes cleanly to a string
    and provides a .list() method for UI dropdowns.
    """

    def __str__(self):
        return str(self.value)

    @classmethod
    def list(cls):
        return [item.value for item in cls]


# -----------------------------------------------------
# ROLE
# -----------------------------------------------------
class Role(BaseStrEnum):
    """Privilege tier of an account: headmaster > admin > editor > reader."""

    headmaster = "headmaster"
    admin = "admin"
    editor = "editor"
    reader = "reader"

    @classmethod
    def parse(cls, value: Any) -> Optional["Role"]:
        """
        Resolve a raw role value to a Role.
        Unknown strings, None and non-strings resolve to None
        (the caller treats that as "no permissions").
        """
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return None
        try:
            return cls(value)
        except ValueError:
            return None


# -----------------------------------------------------
# PERMISSION
# -----------------------------------------------------
class Permission(BaseStrEnum):
    """Known permission tags. Checks still accept any plain string."""

    view_admin_dashboard = "view_admin_dashboard"
    manage_users = "manage_users"
    manage_system_settings = "manage_system_settings"
    view_audit_logs = "view_audit_logs"
    manage_backups = "manage_backups"

    # Documents
    view_all_documents = "view_all_documents"
    create_documents = "create_documents"
    edit_any_document = "edit_any_document"
    delete_any_document = "delete_any_document"
    edit_own_documents = "edit_own_documents"
    delete_own_documents = "delete_own_documents"

    manage_categories = "manage_categories"
    view_analytics = "view_analytics"
    system_maintenance = "system_maintenance"
