"""Regex-based text extraction utilities.

This module provides utilities for extracting values from invoice text
using regular expressions and turning captured tokens into numbers.
"""

import re
from decimal import Decimal
from typing import Pattern

from invoice_extract.utils.logger import setup_logger

logger = setup_logger(__name__)

# Currency symbols that may prefix an amount token
CURRENCY_SYMBOLS = "R$€£¥₹"

AMOUNT_TOKEN = re.compile(r"[0-9]+(\.[0-9]+)?")


class RegexExtractor:
    """Extract text values using regular expressions."""

    @staticmethod
    def extract_first_match(
        text: str, pattern: str | Pattern, group: int = 0
    ) -> str | None:
        """Extract first match of a regex pattern.

        Args:
            text: Text to search
            pattern: Regex pattern (string or compiled Pattern)
            group: Capture group to extract (0 = full match, 1+ = capturing groups)

        Returns:
            Matched text or None if not found
        """
        if isinstance(pattern, str):
            pattern = re.compile(pattern)

        match = pattern.search(text)
        if match:
            try:
                value = match.group(group)
            except IndexError:
                logger.warning(
                    "Invalid group index",
                    extra={"pattern": pattern.pattern, "group": group},
                )
                return None
            if value is None:
                return None
            logger.debug(
                "Regex extraction successful",
                extra={"pattern": pattern.pattern, "value": value},
            )
            return value

        logger.debug("Regex extraction failed", extra={"pattern": pattern.pattern})
        return None

    @staticmethod
    def extract_all_matches(
        text: str, pattern: str | Pattern, group: int = 0
    ) -> list[str]:
        """Extract all matches of a regex pattern.

        Args:
            text: Text to search
            pattern: Regex pattern (string or compiled Pattern)
            group: Capture group to extract

        Returns:
            List of matched values in text order
        """
        if isinstance(pattern, str):
            pattern = re.compile(pattern)

        matches = []
        for match in pattern.finditer(text):
            try:
                value = match.group(group)
            except IndexError:
                continue
            if value is not None:
                matches.append(value)

        logger.debug(
            "Regex extraction complete",
            extra={"pattern": pattern.pattern, "count": len(matches)},
        )
        return matches

    @staticmethod
    def parse_amount(value: str | None) -> Decimal | None:
        """Parse a numeric token with a plain decimal point.

        Whitespace and one leading currency symbol are stripped. What remains
        must be digits with an optional decimal part; thousands separators,
        signs and exponents are rejected.

        Args:
            value: Token such as 'R763.50' or '25.0'

        Returns:
            Decimal value, or None if the token is not a number
        """
        if value is None:
            return None

        cleaned = "".join(value.split())
        if cleaned and cleaned[0] in CURRENCY_SYMBOLS:
            cleaned = cleaned[1:]

        if not AMOUNT_TOKEN.fullmatch(cleaned):
            logger.debug("Not a numeric token", extra={"value": value})
            return None
        return Decimal(cleaned)
