"""Supplier profile models for invoice text extraction.

This module defines Pydantic models for supplier-specific configuration
loaded from YAML. A profile tells the engine how to recognize a supplier's
invoices, where to find header fields, which regex shapes its line items
take and which values count as plausible.
"""

import re
from decimal import Decimal
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

DateFormat = Literal["DD/MM/YY", "DD/MM/YYYY"]

LineItemField = Literal[
    "code",
    "description",
    "quantity",
    "unit",
    "unit_price",
    "discount_percent",
    "net_unit_price",
    "total_price",
]

MetadataField = Literal["invoice_number", "date", "total_amount"]


def _compile(regex: str, flags: int = 0) -> re.Pattern:
    try:
        return re.compile(regex, flags)
    except re.error as e:
        raise ValueError(f"Invalid regex {regex!r}: {e}") from e


class PatternSpec(BaseModel):
    """A single regex with the capture group holding the value."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    regex: str = Field(description="Regex pattern (flags may be given inline, e.g. '(?i)')")
    group: int = Field(default=1, ge=0, description="Capture group to extract")

    @model_validator(mode="after")
    def check_group_exists(self) -> "PatternSpec":
        compiled = _compile(self.regex)
        if self.group > compiled.groups:
            raise ValueError(
                f"Pattern {self.regex!r} has {compiled.groups} groups, "
                f"group {self.group} requested"
            )
        return self

    @property
    def compiled(self) -> re.Pattern:
        return _compile(self.regex)


class MetadataFieldRule(BaseModel):
    """Ordered extraction rules for one metadata field."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    patterns: list[PatternSpec] = Field(
        min_length=1, description="Patterns tried in declared order"
    )
    format: DateFormat | None = Field(
        default=None, description="Declared source format (date field only)"
    )
    location: str | None = Field(
        default=None, description="Where the field usually sits (informational)"
    )
    description: str | None = None

    @field_validator("patterns", mode="before")
    @classmethod
    def coerce_plain_patterns(cls, v):
        """Allow bare regex strings in place of {regex, group} mappings."""
        if isinstance(v, list):
            return [{"regex": p} if isinstance(p, str) else p for p in v]
        return v


class ConstantValue(BaseModel):
    """Fixed value used for a line-item field that has no capture group."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    constant: Decimal | str


class LineItemPattern(BaseModel):
    """One line-item row shape and its capture-group schema."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = Field(description="Pattern name used in diagnostics")
    regex: str
    groups: dict[LineItemField, int | ConstantValue] = Field(
        description="Semantic field -> capture group index or fixed constant"
    )

    @model_validator(mode="after")
    def check_group_mapping(self) -> "LineItemPattern":
        """Fail fast when the regex groups and the mapping disagree."""
        group_count = _compile(self.regex, re.MULTILINE).groups
        referenced = {v for v in self.groups.values() if isinstance(v, int)}

        out_of_range = sorted(i for i in referenced if i < 1 or i > group_count)
        if out_of_range:
            raise ValueError(
                f"Pattern '{self.name}' maps groups {out_of_range} "
                f"but the regex has {group_count} capture groups"
            )

        unmapped = sorted(set(range(1, group_count + 1)) - referenced)
        if unmapped:
            raise ValueError(
                f"Pattern '{self.name}' leaves capture groups {unmapped} unmapped"
            )
        return self

    @property
    def compiled(self) -> re.Pattern:
        return _compile(self.regex, re.MULTILINE)


class ValidationRules(BaseModel):
    """Plausibility ranges for extracted line items."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    quantity_range: tuple[Decimal, Decimal] | None = None
    price_range: tuple[Decimal, Decimal] | None = None
    discount_range: tuple[Decimal, Decimal] = (Decimal("0"), Decimal("100"))
    expected_discounts: list[Decimal] = Field(default_factory=list)
    tax_rate: Decimal | None = Field(default=None, description="VAT percentage")
    reconciliation_tolerance: Decimal = Field(
        default=Decimal("0.5"),
        ge=0,
        description="Allowed drift between printed and computed line totals",
    )

    @field_validator("quantity_range", "price_range", "discount_range")
    @classmethod
    def validate_range_order(cls, v):
        if v is not None and v[0] > v[1]:
            raise ValueError(f"Range minimum {v[0]} exceeds maximum {v[1]}")
        return v


class Profile(BaseModel):
    """Complete detection, extraction and validation rules for one supplier."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    code: str = Field(min_length=1, description="Unique supplier key (e.g. 'medis')")
    display_name: str = Field(description="Supplier name as shown to users")
    identifier: str = Field(description="Regex recognizing this supplier's documents")
    metadata: dict[MetadataField, MetadataFieldRule] = Field(default_factory=dict)
    line_item_patterns: list[LineItemPattern] = Field(default_factory=list)
    validation: ValidationRules = Field(default_factory=ValidationRules)
    prompt_hints: list[str] = Field(default_factory=list)
    expected_columns: list[str] = Field(default_factory=list)
    currency: str = Field(default="ZAR", max_length=3)
    @field_validator("identifier")
    @classmethod
    def validate_identifier(cls, v: str) -> str:
        _compile(v)
        return v

    @field_validator("line_item_patterns")
    @classmethod
    def validate_unique_pattern_names(
        cls, v: list[LineItemPattern]
    ) -> list[LineItemPattern]:
        names = [p.name for p in v]
        duplicates = sorted({n for n in names if names.count(n) > 1})
        if duplicates:
            raise ValueError(f"Duplicate line item pattern names: {duplicates}")
        return v

    @property
    def identifier_pattern(self) -> re.Pattern:
        return _compile(self.identifier)


class EngineSettings(BaseModel):
    """Engine-wide defaults that are not tied to a supplier."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    coverage_tolerance: Decimal = Field(
        default=Decimal("0.05"),
        ge=0,
        description=(
            "Relative gap between the line-item sum and the invoice total "
            "above which the AI-assisted path is recommended"
        ),
    )


class ProfileConfiguration(BaseModel):
    """Top-level layout of a profile YAML file."""

    model_config = ConfigDict(extra="forbid")

    settings: EngineSettings = Field(default_factory=EngineSettings)
    profiles: list[Profile] = Field(default_factory=list)

    @field_validator("profiles")
    @classmethod
    def validate_unique_codes(cls, v: list[Profile]) -> list[Profile]:
        codes = [p.code for p in v]
        duplicates = sorted({c for c in codes if codes.count(c) > 1})
        if duplicates:
            raise ValueError(f"Duplicate profile codes: {duplicates}")
        return v
