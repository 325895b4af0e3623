"""Extraction engine tying detection, extraction and validation together.

The engine is pure: it takes invoice text and returns models. Reading the
document and calling an AI service with the fallback prompt are the
caller's job.
"""

from decimal import Decimal

from invoice_extract.config.profile_registry import ProfileRegistry
from invoice_extract.extraction.line_item_matcher import LineItemMatcher
from invoice_extract.extraction.metadata_extractor import MetadataExtractor
from invoice_extract.extraction.prompt_builder import PromptBuilder
from invoice_extract.extraction.supplier_detector import SupplierDetector
from invoice_extract.extraction.validator import Validator
from invoice_extract.models.extraction import ExtractionResult
from invoice_extract.models.profile import EngineSettings, Profile
from invoice_extract.utils.logger import log_extraction_summary, setup_logger

logger = setup_logger(__name__)


class ExtractionEngine:
    """Extract metadata and line items from invoice text using supplier profiles."""

    def __init__(
        self, registry: ProfileRegistry, settings: EngineSettings | None = None
    ):
        """Initialize the engine.

        Args:
            registry: Supplier profiles, in detection order
            settings: Engine defaults; built-in defaults when omitted
        """
        self.registry = registry
        self.settings = settings or EngineSettings()
        self.detector = SupplierDetector(registry)
        self.metadata_extractor = MetadataExtractor()
        self.line_item_matcher = LineItemMatcher()
        self.validator = Validator()
        self.prompt_builder = PromptBuilder()

    def resolve_profile(
        self, text: str, supplier_code: str | None = None
    ) -> Profile | None:
        """Pick the profile for a document.

        An explicit ``supplier_code`` skips detection and must exist in the
        registry; ProfileNotFoundError is raised otherwise.
        """
        if supplier_code is not None:
            return self.registry.get(supplier_code)

        detected = self.detector.detect(text)
        return self.registry.find(detected)

    def extract(self, text: str, supplier_code: str | None = None) -> ExtractionResult:
        """Extract everything the profiles can find in one document.

        Args:
            text: Raw invoice text
            supplier_code: Force a profile instead of detecting one

        Returns:
            ExtractionResult; never raises for unmatched content

        Raises:
            ProfileNotFoundError: If ``supplier_code`` is not registered
        """
        profile = self.resolve_profile(text, supplier_code)

        metadata = self.metadata_extractor.extract(text, profile)
        line_items = self.line_item_matcher.match(text, profile)
        if profile is not None:
            line_items = self.validator.validate_all(line_items, profile.validation)

        result = ExtractionResult(metadata=metadata, line_items=line_items)

        log_extraction_summary(
            logger,
            metadata.supplier_code,
            invoice_number=metadata.invoice_number,
            date=metadata.date,
            total=metadata.total_amount,
            line_items=len(line_items),
            flagged=sum(1 for item in line_items if item.validation.violations),
        )
        return result

    def needs_ai_fallback(
        self, result: ExtractionResult, tolerance: Decimal | None = None
    ) -> bool:
        """Whether the AI-assisted path should be offered for this result.

        Args:
            result: Output of :meth:`extract`
            tolerance: Allowed relative gap between the line-item sum and the
                invoice total; defaults to ``settings.coverage_tolerance``
        """
        if tolerance is None:
            tolerance = self.settings.coverage_tolerance
        needed = result.needs_ai_fallback(tolerance)
        if needed:
            logger.info(
                "Line item coverage insufficient",
                extra={
                    "line_items": len(result.line_items),
                    "coverage_gap": str(result.coverage_gap),
                },
            )
        return needed

    def build_prompt(self, text: str, result: ExtractionResult) -> str:
        """Build the AI extraction prompt for a document already extracted."""
        profile = self.registry.find(result.metadata.supplier_code)
        return self.prompt_builder.build(text, profile, result.metadata)
