"""
Commission Calculator Unit Tests

Tests for compute_derived_fields: the worked example, the algebraic
relations between the outputs, and NaN / negative-profit behavior.
"""
import dataclasses
import math

import pytest

from services.commission_calculator import DERIVED_FIELDS, DerivedFields, compute_derived_fields


class TestComputeDerivedFields:
    """Tests for the derived money fields of a policy."""

    def test_standard_policy(self):
        """100000 premium at 5% agent, 3% ours, 10% TDS, 18% GST."""
        result = compute_derived_fields(100000, 5, 3, 10, 18)

        assert result.total_commission == 8
        assert result.commission == 8000
        assert result.agent_commission == 5000
        assert result.tds_amount == 800
        assert result.profit_after_tds == 7200
        assert result.our_profit == 2200
        assert result.gst_amount == 18000
        assert result.gross_amount == 118000

    def test_total_commission_is_a_percentage(self):
        """total_commission does not scale with the premium."""
        small = compute_derived_fields(1000, 4.5, 2.5, 10, 18)
        large = compute_derived_fields(1000000, 4.5, 2.5, 10, 18)

        assert small.total_commission == large.total_commission == 7.0

    @pytest.mark.parametrize('premium,agent_rate,our_rate,tds_rate,gst_rate', [
        (100000, 5, 3, 10, 18),
        (12345.67, 7.5, 2.25, 5, 12),
        (999.99, 0, 0, 0, 0),
        (250000, 100, 100, 100, 100),
        (1, 33.3, 11.1, 2, 28),
    ])
    def test_output_relations(self, premium, agent_rate, our_rate, tds_rate, gst_rate):
        """Outputs satisfy the formula relations within float tolerance."""
        result = compute_derived_fields(premium, agent_rate, our_rate, tds_rate, gst_rate)

        assert result.total_commission == agent_rate + our_rate
        assert math.isclose(result.profit_after_tds, result.commission - result.tds_amount, abs_tol=1e-9)
        assert math.isclose(
            result.our_profit,
            result.commission - result.tds_amount - result.agent_commission,
            abs_tol=1e-9,
        )
        assert math.isclose(result.gross_amount, premium + result.gst_amount, abs_tol=1e-9)
        assert math.isclose(result.commission, premium * (agent_rate + our_rate) / 100, rel_tol=1e-12, abs_tol=1e-12)

    def test_our_profit_can_be_negative(self):
        """When the agent takes most of the commission and TDS bites, our profit goes negative."""
        result = compute_derived_fields(100000, 8, 0, 10, 18)

        assert result.commission == 8000
        assert result.tds_amount == 800
        assert result.agent_commission == 8000
        assert result.our_profit == -800

    def test_zero_rates_give_zero_commission(self):
        result = compute_derived_fields(50000, 0, 0, 0, 0)

        assert result.commission == 0
        assert result.our_profit == 0
        assert result.gross_amount == 50000

    def test_nan_propagates_instead_of_raising(self):
        result = compute_derived_fields(float('nan'), 5, 3, 10, 18)

        assert math.isnan(result.commission)
        assert math.isnan(result.our_profit)
        assert math.isnan(result.gross_amount)
        assert result.total_commission == 8

    def test_nan_rate_only_taints_dependent_fields(self):
        result = compute_derived_fields(100000, 5, 3, float('nan'), 18)

        assert math.isnan(result.tds_amount)
        assert math.isnan(result.our_profit)
        assert result.commission == 8000
        assert result.gst_amount == 18000

    def test_rates_outside_range_are_not_clamped(self):
        result = compute_derived_fields(1000, 150, 0, 0, 0)

        assert result.agent_commission == 1500

    def test_ints_give_float_amounts(self):
        result = compute_derived_fields(100000, 5, 3, 10, 18)

        assert result.our_profit == 2200
        assert isinstance(result.gross_amount, float)

    def test_numeric_strings_are_not_coerced(self):
        with pytest.raises(TypeError):
            compute_derived_fields('100000', '5', 3, 10, '18')

    def test_result_is_immutable(self):
        result = compute_derived_fields(100000, 5, 3, 10, 18)

        with pytest.raises(dataclasses.FrozenInstanceError):
            result.commission = 0

    def test_as_dict_has_every_derived_field(self):
        result = compute_derived_fields(100000, 5, 3, 10, 18)

        assert tuple(result.as_dict()) == DERIVED_FIELDS
        assert DerivedFields(**result.as_dict()) == result
