# core/validation.py

import math
import re
from types import MappingProxyType
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

from fastapi import UploadFile
from pydantic import ValidationError

from core.errors import RuleConfigurationError
from core.formatting import get_file_extension
from core.logging_config import logger
from core.utils import SanitizeRule, sanitize_object
from models.validation import (
    CustomResult,
    Err,
    FileDescriptor,
    FileValidationOptions,
    Ok,
    SanitizedValidationResult,
    ValidationResult,
    ValidationRule,
)


# ======================================================
# Built-in patterns
# (\Z is end of input; $ would also accept a trailing newline)
# ======================================================

VALIDATION_PATTERNS = MappingProxyType({
    "email": re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+\Z"),
    # 8+ chars with at least one lowercase, one uppercase and one digit
    "password": re.compile(r"^(?=.*[a-z])(?=.*[A-Z])(?=.*\d).{8,}\Z", re.ASCII),
    # French numbers: +33 or 0, then 9 digits not starting with 0
    "phone": re.compile(r"^(\+33|0)[1-9](\d{8})\Z", re.ASCII),
    "url": re.compile(r"^https?://.+"),
    "alphanumeric": re.compile(r"^[a-zA-Z0-9]+\Z"),
    "filename": re.compile(r"^[a-zA-Z0-9._-]+\Z"),
    "slug": re.compile(r"^[a-z0-9-]+\Z"),
})

VALIDATION_MESSAGES = MappingProxyType({
    "required": "Ce champ est obligatoire",
    "email": "Format d'email invalide",
    "password": (
        "Le mot de passe doit contenir au moins 8 caractères, "
        "une majuscule, une minuscule et un chiffre"
    ),
    "min_length": "Minimum {} caractères requis",
    "max_length": "Maximum {} caractères autorisés",
    "pattern": "Format invalide",
    "phone": "Numéro de téléphone invalide",
    "url": "URL invalide",
    "filename": "Nom de fichier invalide",
    "custom": "Validation personnalisée échouée",
    "file_count": "Maximum {} fichiers autorisés",
    "file_size": "Taille maximale: {}MB",
    "file_type": "Types autorisés: {}",
    "file_extension": "Extensions autorisées: {}",
    "file_name": "Nom de fichier invalide (caractères spéciaux non autorisés)",
})

# Patterns that report their own message instead of the generic one
_SPECIALISED_PATTERNS = ("email", "password", "phone", "url")

_FINAL_EXTENSION = re.compile(r"\.[^/.]+\Z")

FileLike = Union[FileDescriptor, UploadFile, Mapping[str, Any]]


# ======================================================
# Helpers
# ======================================================

def stringify(value: Any) -> str:
    """String form used for length and pattern checks (matches the web client)."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    # JS switches to exponent notation from 1e21 up
    if isinstance(value, float) and value.is_integer() and abs(value) < 1e21:
        return str(int(value))
    if isinstance(value, (list, tuple)):
        return ",".join(stringify(item) for item in value)
    return str(value)


def is_empty(value: Any) -> bool:
    return value is None or (isinstance(value, str) and value == "")


def pattern_message(pattern: re.Pattern) -> str:
    for name in _SPECIALISED_PATTERNS:
        builtin = VALIDATION_PATTERNS[name]
        if pattern is builtin or pattern.pattern == builtin.pattern:
            return VALIDATION_MESSAGES[name]
    return VALIDATION_MESSAGES["pattern"]


def _coerce_rule(field: str, rule: Any) -> ValidationRule:
    if isinstance(rule, ValidationRule):
        return rule
    if isinstance(rule, Mapping):
        try:
            return ValidationRule.model_validate(dict(rule))
        except ValidationError as e:
            logger.error(f"Invalid validation rule for '{field}': {e}")
            raise RuleConfigurationError(field, str(e)) from e
    raise RuleConfigurationError(
        field, f"expected a ValidationRule or mapping, got {type(rule).__name__}"
    )


def _coerce_custom_result(outcome: Any) -> CustomResult:
    # Legacy validators return True | "message" | anything else
    if isinstance(outcome, (Ok, Err)):
        return outcome
    if outcome is True:
        return Ok()
    if isinstance(outcome, str):
        return Err(outcome)
    return Err()


def _run_custom(field: str, rule: ValidationRule, value: Any) -> Optional[str]:
    if not callable(rule.custom):
        logger.error(f"Custom validator for '{field}' is not callable")
        raise RuleConfigurationError(field, "custom validator is not callable")

    outcome = _coerce_custom_result(rule.custom(value))
    if isinstance(outcome, Ok):
        return None
    if outcome.message is None:
        return VALIDATION_MESSAGES["custom"]
    return outcome.message


def _check_field(field: str, rule: ValidationRule, value: Any) -> List[str]:
    if is_empty(value):
        # Required + empty: one error, nothing else checked.
        # Optional + empty: vacuously valid.
        return [VALIDATION_MESSAGES["required"]] if rule.required else []

    errors = []
    text = stringify(value)

    if rule.min_length and len(text) < rule.min_length:
        errors.append(VALIDATION_MESSAGES["min_length"].format(rule.min_length))

    if rule.max_length and len(text) > rule.max_length:
        errors.append(VALIDATION_MESSAGES["max_length"].format(rule.max_length))

    if rule.pattern is not None and not rule.pattern.search(text):
        errors.append(pattern_message(rule.pattern))

    if rule.custom is not None:
        message = _run_custom(field, rule, value)
        if message is not None:
            errors.append(message)

    return errors


# ======================================================
# Field validation
# ======================================================

def validate_data(
    data: Mapping[str, Any],
    rules: Mapping[str, Union[ValidationRule, Mapping[str, Any]]],
) -> ValidationResult:
    """
    Evaluate each field's rule in a fixed order:
    required → min_length → max_length → pattern → custom.
    Only fields with at least one message appear in `errors`.
    """
    errors: Dict[str, List[str]] = {}

    for field, raw_rule in rules.items():
        rule = _coerce_rule(field, raw_rule)
        field_errors = _check_field(field, rule, data.get(field))
        if field_errors:
            errors[field] = field_errors

    return ValidationResult.from_errors(errors)


# ======================================================
# File validation
# ======================================================

def _describe(file: Any) -> FileDescriptor:
    if isinstance(file, FileDescriptor):
        return file
    if isinstance(file, UploadFile):
        return FileDescriptor.from_upload(file)
    if isinstance(file, Mapping):
        return FileDescriptor.model_validate(dict(file))
    return FileDescriptor(
        name=getattr(file, "name", ""),
        size=getattr(file, "size", 0),
        type=getattr(file, "type", ""),
    )


def _size_in_mb(size_bytes: int) -> int:
    # Half-up rounding, like the size shown in the web client
    return math.floor(size_bytes / 1024 / 1024 + 0.5)


def _check_file(file: FileDescriptor, options: FileValidationOptions) -> List[str]:
    errors = []

    if file.size > options.max_size:
        errors.append(VALIDATION_MESSAGES["file_size"].format(_size_in_mb(options.max_size)))

    if options.allowed_types and file.type not in options.allowed_types:
        errors.append(VALIDATION_MESSAGES["file_type"].format(", ".join(options.allowed_types)))

    if options.allowed_extensions:
        extension = get_file_extension(file.name)
        if not extension or extension not in options.allowed_extensions:
            errors.append(
                VALIDATION_MESSAGES["file_extension"].format(", ".join(options.allowed_extensions))
            )

    base_name = _FINAL_EXTENSION.sub("", file.name)
    if not VALIDATION_PATTERNS["filename"].search(base_name):
        errors.append(VALIDATION_MESSAGES["file_name"])

    return errors


def validate_files(
    files: Iterable[FileLike],
    options: Optional[Union[FileValidationOptions, Mapping[str, Any]]] = None,
) -> ValidationResult:
    """
    Check an upload batch. A count error is reported under `count`
    and does not stop the per-file checks (`file_0`, `file_1`, ...).
    """
    if options is None:
        options = FileValidationOptions()
    elif not isinstance(options, FileValidationOptions):
        options = FileValidationOptions.model_validate(dict(options))

    described = [_describe(f) for f in files]
    errors: Dict[str, List[str]] = {}

    if len(described) > options.max_files:
        errors["count"] = [VALIDATION_MESSAGES["file_count"].format(options.max_files)]

    for index, file in enumerate(described):
        file_errors = _check_file(file, options)
        if file_errors:
            errors[f"file_{index}"] = file_errors

    return ValidationResult.from_errors(errors)


# ======================================================
# Combined
# ======================================================

def validate_and_sanitize(
    data: Mapping[str, Any],
    validation_rules: Mapping[str, Union[ValidationRule, Mapping[str, Any]]],
    sanitization_rules: Optional[Mapping[str, SanitizeRule]] = None,
) -> SanitizedValidationResult:
    """
    Sanitize first, then validate the sanitized values.
    Persist `sanitized_data`, never the raw input.
    """
    sanitized = sanitize_object(data, sanitization_rules)
    result = validate_data(sanitized, validation_rules)

    if not result.is_valid:
        logger.info(f"Rejected submission; invalid fields: {sorted(result.errors)}")

    return SanitizedValidationResult(
        is_valid=result.is_valid,
        errors=result.errors,
        sanitized_data=sanitized,
    )
