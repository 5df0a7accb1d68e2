"""
Tax engine tests.

Expected figures are hand-computed with cent rounding after every stage:
670 × 26.07% = 174.669 → 174.67, then 495.33 × 15% = 74.2995 → 74.30.
"""
from decimal import Decimal
from types import SimpleNamespace

import pytest

from errors import InvalidInput
from models.reports import TaxBreakdown
from models.settings import TaxSettings
from services.tax_engine import compute_tax_breakdown, net_income


class TestReferenceScenario:
    def test_thousand_euro_breakdown(self, settings):
        b = compute_tax_breakdown(Decimal("1000.00"), settings)
        assert b.taxable_income == Decimal("670.00")
        assert b.health_insurance == Decimal("174.67")
        assert b.income_for_tax == Decimal("495.33")
        assert b.income_tax == Decimal("74.30")
        assert b.total_tax_burden == Decimal("248.97")

    def test_startup_rate_and_other_coefficient(self):
        settings = TaxSettings(taxable_percentage=Decimal("78"), income_tax_rate=Decimal("5"))
        b = compute_tax_breakdown(1000, settings)
        assert b.taxable_income == Decimal("780.00")
        assert b.health_insurance == Decimal("203.35")
        assert b.income_for_tax == Decimal("576.65")
        assert b.income_tax == Decimal("28.83")
        assert b.total_tax_burden == Decimal("232.18")


class TestIdentities:
    def test_zero_income_gives_all_zero(self, settings):
        assert compute_tax_breakdown(0, settings) == TaxBreakdown()

    @pytest.mark.parametrize("gross", ["0.01", "1", "333.33", "1000", "12345.67", "85000"])
    def test_total_burden_is_tax_plus_insurance(self, settings, gross):
        b = compute_tax_breakdown(Decimal(gross), settings)
        assert b.total_tax_burden == b.income_tax + b.health_insurance
        assert b.income_for_tax == b.taxable_income - b.health_insurance

    @pytest.mark.parametrize("gross", ["0.01", "999.99", "85000"])
    def test_every_field_has_two_decimals(self, settings, gross):
        b = compute_tax_breakdown(Decimal(gross), settings)
        for value in (b.taxable_income, b.health_insurance, b.income_for_tax,
                      b.income_tax, b.total_tax_burden):
            assert value.as_tuple().exponent == -2

    def test_same_input_same_output(self, settings):
        first = compute_tax_breakdown(Decimal("4321.09"), settings)
        second = compute_tax_breakdown(Decimal("4321.09"), settings)
        assert first == second

    def test_float_and_string_inputs_agree(self, settings):
        assert compute_tax_breakdown(1234.56, settings) == compute_tax_breakdown("1234.56", settings)


class TestSettingsShapes:
    def test_accepts_any_object_with_rates(self):
        rates = SimpleNamespace(taxable_percentage=67, income_tax_rate=15, health_insurance_rate="26.07")
        assert compute_tax_breakdown(1000, rates).total_tax_burden == Decimal("248.97")

    def test_missing_settings_rejected(self):
        with pytest.raises(InvalidInput):
            compute_tax_breakdown(1000, None)

    def test_missing_rate_rejected(self):
        with pytest.raises(InvalidInput, match="health_insurance_rate"):
            compute_tax_breakdown(1000, SimpleNamespace(taxable_percentage=67, income_tax_rate=15))

    def test_bad_rate_rejected_even_for_zero_income(self):
        rates = SimpleNamespace(taxable_percentage="abc", income_tax_rate=15, health_insurance_rate=26)
        with pytest.raises(InvalidInput):
            compute_tax_breakdown(0, rates)


class TestInvalidIncome:
    @pytest.mark.parametrize("gross", [None, "abc", float("nan"), float("inf"), True, [1000]])
    def test_non_numeric_rejected(self, settings, gross):
        with pytest.raises(InvalidInput):
            compute_tax_breakdown(gross, settings)

    def test_negative_rejected(self, settings):
        with pytest.raises(InvalidInput, match="negative"):
            compute_tax_breakdown(Decimal("-0.01"), settings)

    def test_invalid_input_is_a_value_error(self, settings):
        with pytest.raises(ValueError):
            compute_tax_breakdown("", settings)


class TestNetIncome:
    def test_subtracts_expenses_and_burden(self, settings):
        b = compute_tax_breakdown(1000, settings)
        assert net_income(1000, Decimal("100"), b) == Decimal("651.03")

    def test_can_go_negative(self, settings):
        b = compute_tax_breakdown(1000, settings)
        assert net_income(1000, Decimal("2000"), b) == Decimal("-1248.97")
