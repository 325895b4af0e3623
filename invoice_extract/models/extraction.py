"""Pydantic models for data extracted from invoice text."""

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from invoice_extract.models.validation_result import ValidationResult


class ExtractedMetadata(BaseModel):
    """Invoice header values. ``None`` always means "not found", never zero."""

    model_config = ConfigDict(frozen=True)

    supplier_code: str | None = Field(
        default=None, description="Registry code of the detected supplier"
    )
    invoice_number: str | None = None
    date: str | None = Field(
        default=None,
        description="YYYY-MM-DD, or the raw token when it could not be parsed",
    )
    total_amount: Decimal | None = Field(default=None, ge=0)


class LineItem(BaseModel):
    """Invoice line item as found in the source text."""

    model_config = ConfigDict(frozen=True)

    code: str | None = None
    description: str | None = None
    quantity: Decimal | None = None
    unit: Decimal | None = Field(
        default=None, description="Units per quantity (pack size)"
    )
    unit_price: Decimal | None = None
    discount_percent: Decimal = Decimal("0")
    net_unit_price: Decimal | None = None
    total_price: Decimal | None = None
    tax_rate: Decimal | None = Field(
        default=None, description="Supplier VAT percentage applied to the net total"
    )

    pattern_name: str | None = Field(
        default=None, description="Line item pattern that produced this row"
    )
    source_text: str | None = Field(default=None, description="Matched source line")
    validation: ValidationResult = Field(default_factory=ValidationResult)

    @property
    def actual_quantity(self) -> Decimal | None:
        """Units delivered: quantity times pack size (pack size 1 when unknown)."""
        if self.quantity is None:
            return None
        return self.quantity * (self.unit if self.unit is not None else Decimal("1"))

    @property
    def subtotal(self) -> Decimal | None:
        """quantity x unit price before discount."""
        if self.quantity is None or self.unit_price is None:
            return None
        return self.quantity * self.unit_price

    @property
    def discount_amount(self) -> Decimal | None:
        gross = self.subtotal
        if gross is None:
            return None
        return gross * self.discount_percent / Decimal("100")

    @property
    def calculated_total(self) -> Decimal | None:
        """quantity x unit price less discount, or None when inputs are missing."""
        gross = self.subtotal
        if gross is None:
            return None
        return gross * (Decimal("1") - self.discount_percent / Decimal("100"))

    @property
    def tax_amount(self) -> Decimal | None:
        """VAT on the calculated net total; None without a rate or a total."""
        net = self.calculated_total
        if net is None or self.tax_rate is None:
            return None
        return net * self.tax_rate / Decimal("100")


class ExtractionResult(BaseModel):
    """Everything extracted from one document."""

    model_config = ConfigDict(frozen=True)

    metadata: ExtractedMetadata
    line_items: list[LineItem] = Field(default_factory=list)

    @property
    def line_items_total(self) -> Decimal:
        return sum(
            (
                item.total_price
                for item in self.line_items
                if item.total_price is not None
            ),
            Decimal("0"),
        )

    @property
    def coverage_gap(self) -> Decimal | None:
        """Relative distance between the line-item sum and the invoice total.

        Returns None when the invoice total is unknown.
        """
        total = self.metadata.total_amount
        if total is None or total == 0:
            return None
        return abs(total - self.line_items_total) / total

    def needs_ai_fallback(self, tolerance: Decimal) -> bool:
        """True when deterministic extraction does not account for the invoice."""
        if not self.line_items:
            return True
        gap = self.coverage_gap
        return gap is not None and gap > tolerance
