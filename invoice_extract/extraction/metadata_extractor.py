"""Invoice metadata extraction driven by supplier profiles.

Header fields are located with the ordered patterns declared in a
profile. Invoice number and date take the first pattern that matches.
The total uses every match of a pattern across the document: small
figures are discarded and the largest remaining amount wins, because
loose "TOTAL" patterns also hit subtotal lines.
"""

from decimal import Decimal

from invoice_extract.extraction.extractors.date_normalizer import DateNormalizer
from invoice_extract.extraction.extractors.regex_extractor import RegexExtractor
from invoice_extract.models.extraction import ExtractedMetadata
from invoice_extract.models.profile import MetadataFieldRule, Profile
from invoice_extract.utils.logger import setup_logger

logger = setup_logger(__name__)

# Candidates at or below this amount are not considered invoice totals
MIN_TOTAL_AMOUNT = Decimal("100")


class MetadataExtractor:
    """Extract invoice number, date and total amount using a profile."""

    def extract(self, text: str, profile: Profile | None) -> ExtractedMetadata:
        """Extract header metadata from invoice text.

        Args:
            text: Raw invoice text
            profile: Resolved supplier profile, or None

        Returns:
            ExtractedMetadata with unmatched fields left as None
        """
        if profile is None:
            return ExtractedMetadata()

        logger.debug("Extracting metadata", extra={"supplier": profile.code})

        invoice_number = None
        date = None
        total_amount = None

        rule = profile.metadata.get("invoice_number")
        if rule:
            invoice_number = self._first_match(text, rule)

        rule = profile.metadata.get("date")
        if rule:
            token = self._first_match(text, rule)
            if token is not None:
                date = DateNormalizer.normalize(token, rule.format)

        rule = profile.metadata.get("total_amount")
        if rule:
            total_amount = self._largest_total(text, rule)

        return ExtractedMetadata(
            supplier_code=profile.code,
            invoice_number=invoice_number,
            date=date,
            total_amount=total_amount,
        )

    def _first_match(self, text: str, rule: MetadataFieldRule) -> str | None:
        for spec in rule.patterns:
            value = RegexExtractor.extract_first_match(text, spec.compiled, spec.group)
            if value:
                return value
        return None

    def _largest_total(self, text: str, rule: MetadataFieldRule) -> Decimal | None:
        for spec in rule.patterns:
            tokens = RegexExtractor.extract_all_matches(text, spec.compiled, spec.group)
            amounts = [RegexExtractor.parse_amount(token) for token in tokens]
            candidates = [a for a in amounts if a is not None and a > MIN_TOTAL_AMOUNT]
            if candidates:
                logger.debug(
                    "Total amount candidates",
                    extra={"candidates": [str(c) for c in candidates]},
                )
                return max(candidates)
        return None
