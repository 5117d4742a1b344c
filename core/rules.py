# core/rules.py
# Fixed JustArchiv rule-sets. Limits here are part of the client contract:
# the web app enforces the same numbers.

import re
from types import MappingProxyType
from typing import Any, Iterable, Mapping

from core.validation import (
    VALIDATION_PATTERNS,
    FileLike,
    validate_data,
    validate_files,
)
from models.enums import Role
from models.validation import (
    CustomResult,
    Err,
    FileValidationOptions,
    Ok,
    ValidationResult,
    ValidationRule,
)


# -----------------------------------------------------
# Custom validators
# -----------------------------------------------------
MAX_TAGS = 10
MAX_TAG_LENGTH = 30


def _valid_role(value: Any) -> CustomResult:
    if value in Role.list():
        return Ok()
    return Err("Rôle invalide")


def _valid_tags(value: Any) -> CustomResult:
    if not isinstance(value, list):
        return Err("Les tags doivent être un tableau")
    if len(value) > MAX_TAGS:
        return Err(f"Maximum {MAX_TAGS} tags autorisés")
    if all(isinstance(tag, str) and len(tag) <= MAX_TAG_LENGTH for tag in value):
        return Ok()
    return Err(f"Chaque tag doit faire moins de {MAX_TAG_LENGTH} caractères")


def _hex_color(value: Any) -> CustomResult:
    if isinstance(value, str) and value.startswith("#"):
        return Ok()
    return Err("La couleur doit commencer par #")


# -----------------------------------------------------
# Entity rule-sets
# -----------------------------------------------------
USER_RULES = MappingProxyType({
    "name": ValidationRule(
        required=True,
        min_length=2,
        max_length=50,
        pattern=re.compile(r"^[a-zA-ZÀ-ÿ\s-]+\Z"),
    ),
    "email": ValidationRule(required=True, pattern=VALIDATION_PATTERNS["email"]),
    "password": ValidationRule(required=True, pattern=VALIDATION_PATTERNS["password"]),
    "role": ValidationRule(required=True, custom=_valid_role),
})

DOCUMENT_RULES = MappingProxyType({
    "title": ValidationRule(required=True, min_length=1, max_length=200),
    "description": ValidationRule(max_length=1000),
    "category": ValidationRule(required=True),
    "tags": ValidationRule(custom=_valid_tags),
})

CATEGORY_RULES = MappingProxyType({
    "name": ValidationRule(required=True, min_length=1, max_length=50),
    "color": ValidationRule(pattern=re.compile(r"^#[0-9A-Fa-f]{6}\Z"), custom=_hex_color),
})

JUSTARCHIV_VALIDATION_RULES = MappingProxyType({
    "user": USER_RULES,
    "document": DOCUMENT_RULES,
    "category": CATEGORY_RULES,
})


# -----------------------------------------------------
# Upload profile
# -----------------------------------------------------
JUSTARCHIV_FILE_OPTIONS = FileValidationOptions(
    max_size=50 * 1024 * 1024,  # 50MB
    allowed_types=[
        "application/pdf",
        "application/msword",
        "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
        "application/vnd.ms-excel",
        "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        "image/jpeg",
        "image/png",
        "image/gif",
        "text/plain",
    ],
    allowed_extensions=[
        "pdf", "doc", "docx",
        "xls", "xlsx",
        "jpg", "jpeg", "png", "gif",
        "txt",
    ],
    max_files=5,
)

# Metadata each file needs before the batch is sent
UPLOAD_METADATA_RULES = MappingProxyType({
    "name": ValidationRule(required=True),
    "physical_location": ValidationRule(required=True),
    "category": ValidationRule(required=True),
})

UPLOAD_METADATA_MESSAGES = MappingProxyType({
    "name": "Le nom est requis",
    "physical_location": "L'emplacement physique est requis",
    "category": "La catégorie est requise",
})

# Free-text metadata fields; whitespace-only counts as blank
_TRIMMED_METADATA = ("name", "physical_location")


# -----------------------------------------------------
# Convenience entry points
# -----------------------------------------------------
def validate_user(data: Mapping[str, Any]) -> ValidationResult:
    return validate_data(data, USER_RULES)


def validate_document(data: Mapping[str, Any]) -> ValidationResult:
    return validate_data(data, DOCUMENT_RULES)


def validate_category(data: Mapping[str, Any]) -> ValidationResult:
    return validate_data(data, CATEGORY_RULES)


def validate_uploads(files: Iterable[FileLike]) -> ValidationResult:
    return validate_files(files, JUSTARCHIV_FILE_OPTIONS)


def validate_upload_metadata(entry: Mapping[str, Any]) -> ValidationResult:
    """
    Check the metadata typed for one file of an upload batch.
    Blank values are reported with the upload form's own wording.
    """
    cleaned = dict(entry)
    for key in _TRIMMED_METADATA:
        if isinstance(cleaned.get(key), str):
            cleaned[key] = cleaned[key].strip()
    result = validate_data(cleaned, UPLOAD_METADATA_RULES)

    errors = {
        field: [UPLOAD_METADATA_MESSAGES[field]]
        for field in result.errors
    }
    return ValidationResult.from_errors(errors)
