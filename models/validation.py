# models/validation.py

import re
from typing import Any, Callable, Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator
from fastapi import UploadFile


# ======================================================
# Custom validator outcome
# ======================================================

class Ok(BaseModel):
    """Custom validator passed."""

    model_config = ConfigDict(frozen=True)


class Err(BaseModel):
    """
    Custom validator failed.
    With a message, that message is reported as-is;
    without one, the generic custom-validation message is used.
    """

    message: Optional[str] = None

    model_config = ConfigDict(frozen=True)

    def __init__(self, message: Optional[str] = None, **data: Any):
        super().__init__(message=message, **data)


CustomResult = Ok | Err


# ======================================================
# Rules
# ======================================================

class ValidationRule(BaseModel):
    """
    Per-field contract. Accepts snake_case or the camelCase keys used
    by the web client (minLength, maxLength).
    """

    required: bool = False
    min_length: Optional[int] = Field(None, alias="minLength")
    max_length: Optional[int] = Field(None, alias="maxLength")
    pattern: Optional[re.Pattern] = None
    custom: Optional[Callable[[Any], Any]] = None

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    @field_validator("pattern", mode="before")
    @classmethod
    def anchor_end_of_input(cls, value: Any) -> Any:
        # A final unescaped $ would also match before a trailing newline
        if isinstance(value, str) and value.endswith("$"):
            body = value[:-1]
            backslashes = len(body) - len(body.rstrip("\\"))
            if backslashes % 2 == 0:
                return body + r"\Z"
        return value


class ValidationResult(BaseModel):
    is_valid: bool
    errors: Dict[str, List[str]] = Field(default_factory=dict)

    @classmethod
    def from_errors(cls, errors: Dict[str, List[str]]) -> "ValidationResult":
        return cls(is_valid=len(errors) == 0, errors=errors)


class SanitizedValidationResult(ValidationResult):
    sanitized_data: Dict[str, Any] = Field(default_factory=dict)


# ======================================================
# Sanitization options
# ======================================================

class SanitizeOptions(BaseModel):
    allow_html: bool = Field(False, alias="allowHTML")
    max_length: Optional[int] = Field(None, alias="maxLength")
    trim: bool = True

    model_config = ConfigDict(frozen=True, populate_by_name=True)


# ======================================================
# Files
# ======================================================

class FileDescriptor(BaseModel):
    """Minimal description of an uploaded file: {name, size, type}."""

    name: str
    size: int = 0
    type: str = ""

    @classmethod
    def from_upload(cls, upload: UploadFile) -> "FileDescriptor":
        return cls(
            name=upload.filename or "",
            size=upload.size or 0,
            type=upload.content_type or "",
        )


class FileValidationOptions(BaseModel):
    max_size: int = Field(10 * 1024 * 1024, alias="maxSize", description="Bytes")
    allowed_types: List[str] = Field(default_factory=list, alias="allowedTypes")
    allowed_extensions: List[str] = Field(default_factory=list, alias="allowedExtensions")
    max_files: int = Field(10, alias="maxFiles")

    model_config = ConfigDict(frozen=True, populate_by_name=True)
