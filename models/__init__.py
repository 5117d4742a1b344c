# -------------------------
# Enums
# -------------------------
from .enums import (
    BaseStrEnum,
    Role,
    Permission,
)

# -------------------------
# User Models
# -------------------------
from .user import User

# -------------------------
# Document / Category Models
# -------------------------
from .document import Document
from .category import Category

# -------------------------
# Validation Models
# -------------------------
from .validation import (
    Ok,
    Err,
    CustomResult,
    ValidationRule,
    ValidationResult,
    SanitizedValidationResult,
    SanitizeOptions,
    FileDescriptor,
    FileValidationOptions,
)

__all__ = [
    # enums
    "BaseStrEnum",
    "Role",
    "Permission",

    # users
    "User",

    # documents / categories
    "Document",
    "Category",

    # validation
    "Ok",
    "Err",
    "CustomResult",
    "ValidationRule",
    "ValidationResult",
    "SanitizedValidationResult",
    "SanitizeOptions",
    "FileDescriptor",
    "FileValidationOptions",
]
