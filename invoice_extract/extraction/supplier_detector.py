"""Supplier detection from raw invoice text."""

from invoice_extract.config.profile_registry import ProfileRegistry
from invoice_extract.utils.logger import setup_logger

logger = setup_logger(__name__)


class SupplierDetector:
    """Resolve which supplier profile applies to a document.

    Profiles are checked in registry order and the first identifier that
    matches wins; there is no scoring between candidates.
    """

    def __init__(self, registry: ProfileRegistry):
        self.registry = registry

    def detect(self, text: str) -> str | None:
        """Return the code of the first matching profile, or None."""
        for code, profile in self.registry.all():
            if profile.identifier_pattern.search(text):
                logger.info(
                    "Detected supplier",
                    extra={"supplier": code, "display_name": profile.display_name},
                )
                return code

        logger.info("No supplier detected, using generic path")
        return None
