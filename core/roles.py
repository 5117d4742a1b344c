# core/roles.py
# Display metadata for roles (labels shown in the French UI)

from types import MappingProxyType
from typing import Any

from models.enums import Role


ROLE_LABELS = MappingProxyType({
    Role.headmaster: "Headmaster",
    Role.admin: "Administrateur",
    Role.editor: "Éditeur",
    Role.reader: "Lecteur",
})

ROLE_DESCRIPTIONS = MappingProxyType({
    Role.headmaster: "Accès complet au système et à l'administration",
    Role.admin: "Gestion des utilisateurs et documents, analytics",
    Role.editor: "Création et modification de documents, catégories",
    Role.reader: "Lecture seule des documents",
})

# Roles an actor may hand out. Admins never grant admin or headmaster.
ASSIGNABLE_ROLES_BY_ACTOR = MappingProxyType({
    Role.headmaster: (Role.headmaster, Role.admin, Role.editor, Role.reader),
    Role.admin: (Role.editor, Role.reader),
})

# Target roles an admin may modify
ADMIN_MANAGEABLE_ROLES = frozenset({Role.editor, Role.reader})


def role_label(role: Any) -> str:
    parsed = Role.parse(role)
    if parsed is None:
        return str(role)
    return ROLE_LABELS[parsed]


def role_description(role: Any) -> str:
    parsed = Role.parse(role)
    if parsed is None:
        return ""
    return ROLE_DESCRIPTIONS[parsed]
