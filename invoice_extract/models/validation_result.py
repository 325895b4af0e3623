"""Validation result models for extracted line items.

This module defines models for capturing validation results,
including errors, warnings, and the set of violated rules.
"""

from enum import Enum

from pydantic import BaseModel, Field


class ValidationSeverity(str, Enum):
    """Severity levels for validation messages."""

    ERROR = "error"
    WARNING = "warning"


class RuleCode(str, Enum):
    """Machine-readable identifiers of line-item validation rules."""

    QUANTITY_OUT_OF_RANGE = "QUANTITY_OUT_OF_RANGE"
    PRICE_OUT_OF_RANGE = "PRICE_OUT_OF_RANGE"
    DISCOUNT_OUT_OF_RANGE = "DISCOUNT_OUT_OF_RANGE"
    UNEXPECTED_DISCOUNT = "UNEXPECTED_DISCOUNT"
    TOTAL_MISMATCH = "TOTAL_MISMATCH"


class ValidationMessage(BaseModel):
    """A single validation message."""

    severity: ValidationSeverity
    field: str | None = Field(
        default=None, description="Field name that failed validation"
    )
    message: str = Field(description="Human-readable validation message")
    code: RuleCode = Field(description="Violated rule identifier")
    context: dict[str, str | int | float | bool] | None = Field(
        default=None, description="Additional context about the validation failure"
    )


class ValidationResult(BaseModel):
    """Result of validating one line item.

    Errors are hard range violations, warnings are advisory (unexpected
    discount, total drift). Neither stops extraction.
    """

    is_valid: bool = Field(
        default=True, description="True if validation passed with no errors"
    )
    errors: list[ValidationMessage] = Field(
        default_factory=list, description="List of validation errors"
    )
    warnings: list[ValidationMessage] = Field(
        default_factory=list, description="List of validation warnings"
    )

    @property
    def has_warnings(self) -> bool:
        """Check if there are any warnings."""
        return len(self.warnings) > 0

    @property
    def has_errors(self) -> bool:
        """Check if there are any errors."""
        return len(self.errors) > 0

    @property
    def violations(self) -> frozenset[RuleCode]:
        """Identifiers of every violated rule, errors and warnings alike."""
        return frozenset(m.code for m in self.errors + self.warnings)

    def add_error(
        self,
        message: str,
        code: RuleCode,
        field: str | None = None,
        context: dict[str, str | int | float | bool] | None = None,
    ) -> None:
        """Add an error message and mark validation as failed."""
        self.errors.append(
            ValidationMessage(
                severity=ValidationSeverity.ERROR,
                field=field,
                message=message,
                code=code,
                context=context,
            )
        )
        self.is_valid = False

    def add_warning(
        self,
        message: str,
        code: RuleCode,
        field: str | None = None,
        context: dict[str, str | int | float | bool] | None = None,
    ) -> None:
        """Add a warning message."""
        self.warnings.append(
            ValidationMessage(
                severity=ValidationSeverity.WARNING,
                field=field,
                message=message,
                code=code,
                context=context,
            )
        )
