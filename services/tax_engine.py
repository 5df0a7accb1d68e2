"""
services/tax_engine.py
----------------------
Regime forfettario tax breakdown. Pure function: no I/O, same input,
same output.

    taxable_income   = gross × taxable_percentage / 100
    health_insurance = taxable_income × health_insurance_rate / 100   (INPS, deductible)
    income_for_tax   = taxable_income − health_insurance
    income_tax       = income_for_tax × income_tax_rate / 100
    total_tax_burden = income_tax + health_insurance

Each line is rounded to cents before the next one uses it. Fixtures
depend on this staged rounding, so it must not become a single rounding
at the end.
"""

from decimal import Decimal

from errors import InvalidInput
from models.reports import TaxBreakdown
from utils.money import percent_of, round2, to_decimal


def compute_tax_breakdown(gross_income, settings) -> TaxBreakdown:
    """
    Compute the tax burden on a gross income.

    Args:
        gross_income: Net invoiced revenue (invoice ``amount``), >= 0.
        settings: Anything exposing ``taxable_percentage``,
            ``income_tax_rate`` and ``health_insurance_rate``
            (normally a TaxSettings). Rates are percentages and are not
            range-checked here.

    Returns:
        TaxBreakdown with every field rounded to cents.

    Raises:
        InvalidInput: if the income or a rate is missing, non-numeric,
            NaN or infinite, or if the income is negative.
    """
    gross = to_decimal(gross_income, "gross_income")
    if gross < 0:
        raise InvalidInput(f"gross_income cannot be negative, got {gross}")

    taxable_pct = _rate(settings, "taxable_percentage")
    income_tax_rate = _rate(settings, "income_tax_rate")
    health_rate = _rate(settings, "health_insurance_rate")

    if gross == 0:
        return TaxBreakdown()

    taxable_income = percent_of(gross, taxable_pct)
    health_insurance = percent_of(taxable_income, health_rate)
    income_for_tax = round2(taxable_income - health_insurance)
    income_tax = percent_of(income_for_tax, income_tax_rate)
    total_tax_burden = round2(income_tax + health_insurance)

    return TaxBreakdown(
        taxable_income=taxable_income,
        health_insurance=health_insurance,
        income_for_tax=income_for_tax,
        income_tax=income_tax,
        total_tax_burden=total_tax_burden,
    )


def net_income(gross_income, expenses, breakdown: TaxBreakdown) -> Decimal:
    """Income − expenses − total tax burden, rounded. May be negative."""
    return round2(
        to_decimal(gross_income, "gross_income")
        - to_decimal(expenses, "expenses")
        - breakdown.total_tax_burden
    )


def _rate(settings, name: str) -> Decimal:
    if settings is None:
        raise InvalidInput("Tax settings are required")
    try:
        value = getattr(settings, name)
    except AttributeError:
        raise InvalidInput(f"Tax settings are missing {name}") from None
    return to_decimal(value, name)

