from decimal import Decimal

import pytest
from pydantic import ValidationError

from invoice_extract.models.extraction import ExtractedMetadata, ExtractionResult, LineItem
from invoice_extract.models.profile import (
    LineItemPattern,
    MetadataFieldRule,
    PatternSpec,
    ValidationRules,
)


def test_metadata_rule_accepts_bare_regex_strings():
    rule = MetadataFieldRule.model_validate({"patterns": [r"No:\s*(\d+)"]})
    assert rule.patterns == [PatternSpec(regex=r"No:\s*(\d+)", group=1)]


def test_pattern_spec_rejects_missing_group():
    with pytest.raises(ValidationError, match="group 2 requested"):
        PatternSpec(regex=r"No:\s*(\d+)", group=2)


def test_line_item_pattern_accepts_constant_mapping():
    pattern = LineItemPattern.model_validate(
        {
            "name": "each",
            "regex": r"^(\S+)\s+Each$",
            "groups": {"code": 1, "unit": {"constant": 1}},
        }
    )
    assert pattern.groups["code"] == 1
    assert pattern.groups["unit"].constant == Decimal("1")


def test_line_item_pattern_rejects_unknown_field():
    with pytest.raises(ValidationError):
        LineItemPattern.model_validate(
            {"name": "bad", "regex": r"^(\S+)$", "groups": {"sku": 1}}
        )


def test_line_item_pattern_rejects_unmapped_group():
    with pytest.raises(ValidationError, match=r"unmapped"):
        LineItemPattern(name="bad", regex=r"^(\S+)\s+(\d+)$", groups={"code": 1})


def test_validation_rules_reject_inverted_range():
    with pytest.raises(ValidationError, match="exceeds maximum"):
        ValidationRules(quantity_range=(10, 1))


def test_extracted_metadata_defaults_to_none():
    metadata = ExtractedMetadata()
    assert metadata.supplier_code is None
    assert metadata.invoice_number is None
    assert metadata.date is None
    assert metadata.total_amount is None


def test_extracted_metadata_is_frozen():
    metadata = ExtractedMetadata(invoice_number="IN1")
    with pytest.raises(ValidationError):
        metadata.invoice_number = "IN2"


def test_calculated_total_applies_discount():
    item = LineItem(
        quantity=Decimal("4.00"),
        unit_price=Decimal("300.33"),
        discount_percent=Decimal("25.0"),
    )
    assert item.calculated_total == Decimal("900.99")


def test_calculated_total_unknown_without_price():
    assert LineItem(quantity=Decimal("1")).calculated_total is None


def test_derived_line_amounts():
    item = LineItem(
        quantity=Decimal("4.00"),
        unit=Decimal("6"),
        unit_price=Decimal("300.33"),
        discount_percent=Decimal("25.0"),
        tax_rate=Decimal("15"),
    )
    assert item.actual_quantity == Decimal("24")
    assert item.subtotal == Decimal("1201.32")
    assert item.discount_amount == Decimal("300.33")
    assert item.tax_amount == Decimal("135.1485")


def test_tax_amount_unknown_without_rate():
    item = LineItem(quantity=Decimal("1"), unit_price=Decimal("10"))
    assert item.subtotal == Decimal("10")
    assert item.actual_quantity == Decimal("1")
    assert item.tax_amount is None


def test_coverage_gap_and_fallback_decision():
    metadata = ExtractedMetadata(total_amount=Decimal("1000"))
    covered = ExtractionResult(
        metadata=metadata,
        line_items=[LineItem(total_price=Decimal("600")), LineItem(total_price=Decimal("390"))],
    )
    assert covered.line_items_total == Decimal("990")
    assert covered.coverage_gap == Decimal("0.01")
    assert covered.needs_ai_fallback(Decimal("0.05")) is False
    assert covered.needs_ai_fallback(Decimal("0.005")) is True


def test_empty_result_needs_fallback():
    result = ExtractionResult(metadata=ExtractedMetadata())
    assert result.coverage_gap is None
    assert result.needs_ai_fallback(Decimal("0.05")) is True
