"""Plausibility checks for extracted line items.

Validation never rejects a line item. Violations are attached to the item
so a reviewer can see which values look wrong.
"""

from decimal import Decimal

from invoice_extract.models.extraction import LineItem
from invoice_extract.models.profile import ValidationRules
from invoice_extract.models.validation_result import RuleCode, ValidationResult
from invoice_extract.utils.logger import log_validation_result, setup_logger

logger = setup_logger(__name__)

PRICE_FIELDS = ("unit_price", "net_unit_price", "total_price")


def _in_range(value: Decimal, bounds: tuple[Decimal, Decimal]) -> bool:
    return bounds[0] <= value <= bounds[1]


class Validator:
    """Check line items against a profile's validation rules."""

    def validate(self, item: LineItem, rules: ValidationRules) -> ValidationResult:
        """Validate a single line item.

        Args:
            item: Extracted line item
            rules: Validation rules of the supplier profile

        Returns:
            ValidationResult listing every violated rule
        """
        result = ValidationResult()

        if rules.quantity_range and item.quantity is not None:
            if not _in_range(item.quantity, rules.quantity_range):
                result.add_error(
                    f"Quantity {item.quantity} outside "
                    f"{list(map(str, rules.quantity_range))}",
                    code=RuleCode.QUANTITY_OUT_OF_RANGE,
                    field="quantity",
                    context={"value": str(item.quantity)},
                )

        if rules.price_range:
            for field in PRICE_FIELDS:
                value = getattr(item, field)
                if value is not None and not _in_range(value, rules.price_range):
                    result.add_error(
                        f"{field} {value} outside {list(map(str, rules.price_range))}",
                        code=RuleCode.PRICE_OUT_OF_RANGE,
                        field=field,
                        context={"value": str(value)},
                    )

        discount = item.discount_percent
        if not _in_range(discount, rules.discount_range):
            result.add_error(
                f"Discount {discount}% outside {list(map(str, rules.discount_range))}",
                code=RuleCode.DISCOUNT_OUT_OF_RANGE,
                field="discount_percent",
                context={"value": str(discount)},
            )
        elif rules.expected_discounts and discount not in rules.expected_discounts:
            result.add_warning(
                f"Discount {discount}% is not one of the usual "
                f"{[str(d) for d in rules.expected_discounts]}",
                code=RuleCode.UNEXPECTED_DISCOUNT,
                field="discount_percent",
                context={"value": str(discount)},
            )

        expected_total = item.calculated_total
        if expected_total is not None and item.total_price is not None:
            difference = abs(item.total_price - expected_total)
            if difference > rules.reconciliation_tolerance:
                result.add_warning(
                    f"Total {item.total_price} does not match "
                    f"quantity x unit price less discount ({expected_total:.2f})",
                    code=RuleCode.TOTAL_MISMATCH,
                    field="total_price",
                    context={
                        "expected": str(expected_total),
                        "difference": str(difference),
                    },
                )

        return result

    def validate_all(
        self, items: list[LineItem], rules: ValidationRules
    ) -> list[LineItem]:
        """Attach a validation result to every item, preserving order."""
        validated = []
        for item in items:
            result = self.validate(item, rules)
            log_validation_result(
                logger,
                item.code or item.description or "?",
                result.is_valid,
                [m.message for m in result.errors],
                [m.message for m in result.warnings],
            )
            validated.append(item.model_copy(update={"validation": result}))
        return validated
