from decimal import Decimal

import pytest

from invoice_extract.extraction.metadata_extractor import MetadataExtractor


@pytest.fixture
def extractor() -> MetadataExtractor:
    return MetadataExtractor()


def test_medis_metadata(extractor, medis_profile, medis_text):
    metadata = extractor.extract(medis_text, medis_profile)

    assert metadata.supplier_code == "medis"
    assert metadata.invoice_number == "IN326587"
    assert metadata.date == "2025-02-17"
    assert metadata.total_amount == Decimal("2223.41")


def test_transpharm_total_ignores_subtotal(extractor, registry, transpharm_text):
    metadata = extractor.extract(transpharm_text, registry.get("transpharm"))

    assert metadata.invoice_number == "TP-2025-001"
    assert metadata.date == "2025-02-15"
    assert metadata.total_amount == Decimal("1545.03")


def test_total_discards_small_amounts_and_takes_maximum(extractor, medis_profile):
    text = "MEDIS (PTY) LTD\nTOTAL: R50.00\nTOTAL: R900.99\nTOTAL: R120.00"
    assert extractor.extract(text, medis_profile).total_amount == Decimal("900.99")


def test_total_of_exactly_one_hundred_is_discarded(extractor, medis_profile):
    text = "MEDIS (PTY) LTD\nTOTAL: R100.00\nTOTAL: R40.00"
    assert extractor.extract(text, medis_profile).total_amount is None


def test_later_total_pattern_used_when_first_has_no_candidates(extractor, medis_profile):
    text = "MEDIS (PTY) LTD\nTOTAL: R12.00\nTotal price including tax: R480.00"
    assert extractor.extract(text, medis_profile).total_amount == Decimal("480.00")


def test_invoice_number_uses_first_matching_pattern(extractor, make_profile):
    profile = make_profile(
        "acme",
        "ACME",
        metadata={
            "invoice_number": {
                "patterns": [r"Ref\s*:\s*(\w+)", r"Invoice\s*:\s*(\w+)"],
            }
        },
    )
    text = "ACME\nInvoice: INV9\nRef: R77"

    assert extractor.extract(text, profile).invoice_number == "R77"
    assert extractor.extract("ACME\nInvoice: INV9", profile).invoice_number == "INV9"


def test_unmatched_fields_are_none(extractor, medis_profile):
    metadata = extractor.extract("MEDIS (PTY) LTD\nnothing else here", medis_profile)

    assert metadata.supplier_code == "medis"
    assert metadata.invoice_number is None
    assert metadata.date is None
    assert metadata.total_amount is None


def test_profile_without_rules_yields_empty_fields(extractor, make_profile):
    metadata = extractor.extract("ACME", make_profile("acme", "ACME"))
    assert metadata.model_dump() == {
        "supplier_code": "acme",
        "invoice_number": None,
        "date": None,
        "total_amount": None,
    }


def test_no_profile_returns_empty_shell(extractor, unknown_text):
    metadata = extractor.extract(unknown_text, None)
    assert metadata.model_dump() == {
        "supplier_code": None,
        "invoice_number": None,
        "date": None,
        "total_amount": None,
    }


def test_unparseable_date_is_kept_verbatim(extractor, make_profile):
    profile = make_profile(
        "acme",
        "ACME",
        metadata={"date": {"format": "DD/MM/YY", "patterns": [r"Date:\s*(\d+/\d+/\d+)"]}},
    )
    assert extractor.extract("ACME\nDate: 31/02/25", profile).date == "31/02/25"
