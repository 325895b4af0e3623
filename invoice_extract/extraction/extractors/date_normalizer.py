"""Date normalization for supplier-declared date formats.

Dates are converted to ISO ``YYYY-MM-DD``. When a token cannot be parsed
it is returned unchanged so that the caller still sees what the invoice
printed.
"""

import re
from datetime import date

from dateutil import parser as date_parser

from invoice_extract.models.profile import DateFormat
from invoice_extract.utils.logger import setup_logger

logger = setup_logger(__name__)

# Two-digit years below the pivot belong to the 2000s, the rest to the 1900s
CENTURY_PIVOT = 50

SLASH_FORMATS = ("DD/MM/YY", "DD/MM/YYYY")

NUMERIC_TRIPLE = re.compile(r"\d+/\d+/\d+")


class DateNormalizer:
    """Convert invoice date tokens to canonical ISO dates."""

    @staticmethod
    def expand_year(year: str) -> int:
        """Expand a two-digit year using the fixed century pivot."""
        value = int(year)
        if len(year) == 2:
            return 2000 + value if value < CENTURY_PIVOT else 1900 + value
        return value

    @staticmethod
    def normalize(token: str, fmt: DateFormat | None = None) -> str:
        """Normalize a date token to ``YYYY-MM-DD``.

        Args:
            token: Date text captured from the invoice (e.g. '17/02/25')
            fmt: Declared source format, or None for generic parsing

        Returns:
            ISO date string, or ``token`` unchanged if it cannot be parsed
        """
        if fmt in SLASH_FORMATS:
            parsed = DateNormalizer._parse_day_month_year(token)
            if parsed is not None:
                return parsed.isoformat()
            # A numeric triple that breaks the declared layout is never
            # reinterpreted in another field order
            if NUMERIC_TRIPLE.fullmatch(token.strip()) is None:
                logger.debug(
                    "Structured date parse failed, trying generic parser",
                    extra={"token": token, "date_format": fmt},
                )
                parsed = DateNormalizer._parse_generic(token)
        else:
            parsed = DateNormalizer._parse_generic(token)

        if parsed is not None:
            return parsed.isoformat()

        logger.warning(
            "Date could not be parsed, keeping raw value",
            extra={"token": token, "date_format": fmt},
        )
        return token

    @staticmethod
    def _parse_day_month_year(token: str) -> date | None:
        parts = token.strip().split("/")
        if len(parts) != 3 or not all(p.isdigit() for p in parts):
            return None

        day, month, year = parts
        if len(year) not in (2, 4):
            return None

        try:
            return date(DateNormalizer.expand_year(year), int(month), int(day))
        except ValueError:
            return None

    @staticmethod
    def _parse_generic(token: str) -> date | None:
        try:
            return date_parser.parse(token, dayfirst=True).date()
        except (ValueError, OverflowError):
            return None
