"""Line item extraction with ordered, declarative regex patterns."""

import re
from decimal import Decimal

from invoice_extract.extraction.extractors.regex_extractor import RegexExtractor
from invoice_extract.models.extraction import LineItem
from invoice_extract.models.profile import ConstantValue, LineItemPattern, Profile
from invoice_extract.utils.logger import setup_logger

logger = setup_logger(__name__)

TEXT_FIELDS = ("code", "description")


class UnparsableRowError(ValueError):
    """Raised when a numeric capture in a matched row is not a number."""


class LineItemMatcher:
    """Apply a profile's line item patterns to invoice text.

    Every pattern is applied to the whole document. Patterns are not
    mutually exclusive, so rows of different shapes in one invoice are all
    collected: results are grouped by pattern in declaration order and kept
    in text order within each group.
    """

    def match(self, text: str, profile: Profile | None) -> list[LineItem]:
        """Extract line items from invoice text.

        Args:
            text: Raw invoice text
            profile: Resolved supplier profile, or None

        Returns:
            Line items in pattern order, then text order
        """
        if profile is None:
            return []

        items: list[LineItem] = []
        for pattern in profile.line_item_patterns:
            found = self.match_pattern(text, pattern, profile.validation.tax_rate)
            logger.debug(
                "Line item pattern applied",
                extra={
                    "supplier": profile.code,
                    "pattern_name": pattern.name,
                    "count": len(found),
                },
            )
            items.extend(found)

        return items

    def match_pattern(
        self, text: str, pattern: LineItemPattern, tax_rate: Decimal | None = None
    ) -> list[LineItem]:
        items = []
        for match in pattern.compiled.finditer(text):
            try:
                items.append(self._build_item(match, pattern, tax_rate))
            except UnparsableRowError as e:
                logger.warning(
                    "Skipping line item row",
                    extra={
                        "pattern_name": pattern.name,
                        "row": match.group(0),
                        "reason": str(e),
                    },
                )
        return items

    def _build_item(
        self, match: re.Match, pattern: LineItemPattern, tax_rate: Decimal | None
    ) -> LineItem:
        values: dict[str, str | Decimal | None] = {}
        for field, source in pattern.groups.items():
            if isinstance(source, ConstantValue):
                raw = source.constant
            else:
                raw = match.group(source)

            if field in TEXT_FIELDS:
                values[field] = str(raw).strip() if raw is not None else None
            elif isinstance(raw, Decimal) or raw is None:
                values[field] = raw
            else:
                amount = RegexExtractor.parse_amount(raw)
                if amount is None:
                    raise UnparsableRowError(f"{field} is not a number: {raw!r}")
                values[field] = amount

        if values.get("discount_percent") is None:
            values.pop("discount_percent", None)

        return LineItem(
            **values,
            tax_rate=tax_rate,
            pattern_name=pattern.name,
            source_text=match.group(0).strip(),
        )
