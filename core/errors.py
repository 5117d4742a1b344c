# core/errors.py

from fastapi import HTTPException, status

from models.validation import ValidationResult


class RuleConfigurationError(TypeError):
    """
    A rule-set entry is malformed (e.g. a `custom` validator that is not
    callable). This is a deployment defect, not bad user input, so it is
    raised instead of being reported as a validation error.
    """

    def __init__(self, field: str, reason: str):
        self.field = field
        self.reason = reason
        super().__init__(f"Invalid validation rule for '{field}': {reason}")


def permission_denied(detail: str = "Permission denied") -> HTTPException:
    """
    Build a 403 for a failed authorization check.
    Returns HTTPException (doesn't raise) so caller can customize or re-raise.
    """
    return HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=detail)


def validation_failed(result: ValidationResult) -> HTTPException:
    """
    Build a 422 carrying the per-field error map of a failed validation.
    """
    return HTTPException(
        status_code=422,
        detail={"errors": result.errors},
    )
