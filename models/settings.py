"""
models/settings.py
------------------
Regime forfettario parameters as read from the settings table.
"""

from dataclasses import dataclass, field, replace
from decimal import Decimal

from config import (
    DEFAULT_HEALTH_INSURANCE_RATE,
    DEFAULT_INCOME_TAX_RATE,
    DEFAULT_TARGET_SALARY,
    DEFAULT_TAXABLE_PERCENTAGE,
    DEFAULT_VAT_RATE,
)
from errors import InvalidInput
from utils.logger import get_logger
from utils.money import to_decimal

logger = get_logger(__name__)

_DECIMAL_KEYS = (
    "taxable_percentage",
    "income_tax_rate",
    "health_insurance_rate",
    "target_salary",
    "default_vat_rate",
)


@dataclass(frozen=True)
class TaxSettings:
    """
    Immutable snapshot of the regime parameters.

    Attributes:
        taxable_percentage: Coefficiente di redditività (share of revenue that is taxed).
        income_tax_rate: Flat substitute tax rate (15%, or 5% for start-ups).
        health_insurance_rate: INPS Gestione Separata rate, applied to taxable income.
        target_salary: Monthly net amount the freelancer wants to take home.
        default_vat_rate: IVA rate proposed for new invoices.
    """
    taxable_percentage: Decimal = field(default_factory=lambda: Decimal(DEFAULT_TAXABLE_PERCENTAGE))
    income_tax_rate: Decimal = field(default_factory=lambda: Decimal(DEFAULT_INCOME_TAX_RATE))
    health_insurance_rate: Decimal = field(default_factory=lambda: Decimal(DEFAULT_HEALTH_INSURANCE_RATE))
    target_salary: Decimal = field(default_factory=lambda: Decimal(DEFAULT_TARGET_SALARY))
    default_vat_rate: Decimal = field(default_factory=lambda: Decimal(DEFAULT_VAT_RATE))

    @classmethod
    def from_rows(cls, rows: dict[str, str]) -> "TaxSettings":
        """
        Build settings from ``setting_key -> setting_value`` pairs.
        Missing, blank or unparsable keys keep their defaults.
        """
        values = {}
        for key in _DECIMAL_KEYS:
            raw = rows.get(key)
            if raw is None or not str(raw).strip():
                continue
            try:
                values[key] = to_decimal(raw, key)
            except InvalidInput as e:
                logger.warning(f"Ignoring stored setting {key}={raw!r}: {e}")
        return cls(**values)

    def with_overrides(self, **overrides) -> "TaxSettings":
        """Return a copy with the given non-None values replacing stored ones."""
        changes = {
            key: to_decimal(value, key)
            for key, value in overrides.items()
            if value is not None
        }
        return replace(self, **changes)
