"""Prompt text for AI-assisted line item extraction.

The builder only produces text. Sending it to a model and mapping the
JSON reply back to line items is left to the caller.
"""

from invoice_extract.models.extraction import ExtractedMetadata
from invoice_extract.models.profile import Profile

FIELD_LEGEND = [
    "- code: product/item code (string)",
    "- description: product description (string)",
    "- quantity: total quantity (number)",
    "- unitPrice: price per unit excluding tax (number)",
    "- discountPercent: discount percentage if shown (number, default 0)",
    "- totalPrice: total line price (number)",
]

SCHEMA_FIELDS = "code, description, quantity, unitPrice, discountPercent, totalPrice"


class PromptBuilder:
    """Compose extraction prompts from profile hints and known metadata."""

    def build(
        self, text: str, profile: Profile | None, metadata: ExtractedMetadata
    ) -> str:
        """Build the prompt for one document.

        Args:
            text: Raw invoice text to embed in the prompt
            profile: Resolved supplier profile, or None for the generic prompt
            metadata: Metadata already extracted, used as validation anchors

        Returns:
            Prompt text
        """
        if profile is None:
            return self.build_generic(text, metadata)

        name = profile.display_name
        lines = [
            f"You are an expert at extracting line items from {name} invoices.",
            "",
            f"SUPPLIER: {name}",
        ]
        if profile.expected_columns:
            lines.append(f"TABLE COLUMNS: {' | '.join(profile.expected_columns)}")

        if profile.prompt_hints:
            lines += ["", f"SPECIFIC INSTRUCTIONS FOR {name.upper()}:"]
            lines += [f"- {hint}" for hint in profile.prompt_hints]

        lines += [
            "",
            "Extract ALL line items and return as JSON array with these fields:",
            *FIELD_LEGEND,
        ]

        anchors = self._anchor_sentences(metadata, profile.currency)
        if anchors:
            lines += ["", "IMPORTANT VALIDATION:", *anchors]

        lines += [
            "",
            'Look carefully for discount percentages in any "Disc%" or discount columns.',
            "",
            "Invoice text:",
            text,
            "",
            "Return ONLY a valid JSON array:",
        ]
        return "\n".join(lines)

    def build_generic(self, text: str, metadata: ExtractedMetadata) -> str:
        lines = [
            "Extract line items from this invoice text and return as JSON array.",
            "",
            f"Each item should have: {SCHEMA_FIELDS}",
        ]

        total_sentence = self._total_sentence(metadata, currency=None)
        if total_sentence:
            lines += ["", total_sentence]

        lines += ["", "Invoice text:", text, "", "JSON array:"]
        return "\n".join(lines)

    def _anchor_sentences(
        self, metadata: ExtractedMetadata, currency: str | None
    ) -> list[str]:
        sentences = []
        total_sentence = self._total_sentence(metadata, currency)
        if total_sentence:
            sentences.append(total_sentence)
        if metadata.invoice_number:
            sentences.append(f"The invoice number is {metadata.invoice_number}.")
        return sentences

    @staticmethod
    def _total_sentence(metadata: ExtractedMetadata, currency: str | None) -> str | None:
        if metadata.total_amount is None:
            return None
        amount = f"{metadata.total_amount:.2f}"
        if currency:
            amount = f"{amount} {currency}"
        return (
            f"The invoice total is {amount}. "
            "Your extracted line items must add up close to this amount."
        )
