# -*- coding: utf-8 -*-
"""Tests for the BC+200 persistence model (Table 6.1, Equations 6.3 & 6.4)."""

import math

import pytest

from biochar_corc.constants import PERSISTENCE_TABLE
from biochar_corc.exceptions import DomainError
from biochar_corc.persistence import (
    calculate_c_loss,
    calculate_permanent_carbon,
    calculate_persistence_fraction,
    estimate_persistence_range,
    get_persistence_coefficients,
    persistence_breakdown,
)


class TestTable:

    def test_table_covers_7_to_40(self):
        assert sorted(PERSISTENCE_TABLE) == list(range(7, 41))

    def test_table_is_read_only(self):
        with pytest.raises(TypeError):
            PERSISTENCE_TABLE[41] = PERSISTENCE_TABLE[40]


class TestCoefficients:

    def test_in_range_lookup(self):
        coefficients, used, clamped = get_persistence_coefficients(15.0)

        assert (coefficients.m, coefficients.a) == (89.10, 32.56)
        assert used == 15
        assert clamped is False

    @pytest.mark.parametrize("temperature,used", [
        (14.5, 15),
        (15.49, 15),
        (7.0, 7),
        (40.0, 40),
    ])
    def test_half_up_rounding(self, temperature, used):
        assert get_persistence_coefficients(temperature)[1] == used

    @pytest.mark.parametrize("temperature,used", [
        (6.9, 7),
        (6.5, 7),
        (-5.0, 7),
        (40.1, 40),
        (55.0, 40),
    ])
    def test_out_of_range_is_clamped_and_reported(self, temperature, used):
        coefficients, temperature_used, clamped = get_persistence_coefficients(temperature)

        assert temperature_used == used
        assert clamped is True
        assert coefficients == PERSISTENCE_TABLE[used]

    def test_non_finite_temperature_rejected(self):
        with pytest.raises(DomainError):
            get_persistence_coefficients(math.nan)


class TestPersistenceFraction:

    def test_reference_value(self):
        result = calculate_persistence_fraction(0.45, 15.0)

        assert result.persistence_fraction_percent == pytest.approx(74.448)
        assert result.temperature_used_c == 15
        assert result.temperature_clamped is False

    def test_threshold_ratio_allowed(self):
        result = calculate_persistence_fraction(0.7, 40.0)
        assert result.persistence_fraction_percent == pytest.approx(86.19 - 48.25 * 0.7)

    @pytest.mark.parametrize("ratio", [0.70000001, 1.2, -0.01])
    def test_invalid_ratio_rejected(self, ratio):
        with pytest.raises(DomainError):
            calculate_persistence_fraction(ratio, 15.0)

    def test_clamped_temperature_flagged(self):
        result = calculate_persistence_fraction(0.45, 6.9)

        assert result.temperature_used_c == 7
        assert result.temperature_clamped is True


class TestCarbonLoss:

    def test_reference_value(self):
        assert calculate_c_loss(29.3333, 74.448) == pytest.approx(7.495, abs=1e-3)

    def test_full_persistence_means_no_loss(self):
        assert calculate_c_loss(10.0, 100.0) == 0.0

    def test_zero_persistence_means_total_loss(self):
        assert calculate_c_loss(10.0, 0.0) == 10.0

    def test_loss_and_permanent_sum_to_stored(self):
        loss = calculate_c_loss(29.3333, 74.448)
        permanent = calculate_permanent_carbon(29.3333, 74.448)
        assert loss + permanent == pytest.approx(29.3333)

    @pytest.mark.parametrize("c_stored,pf", [(-1.0, 50.0), (10.0, -0.1), (10.0, 100.1)])
    def test_invalid_arguments_rejected(self, c_stored, pf):
        with pytest.raises(DomainError):
            calculate_c_loss(c_stored, pf)


class TestReportingHelpers:

    def test_breakdown(self):
        breakdown = persistence_breakdown(0.45, 15.0, 29.3333)

        assert breakdown.loss_percent == pytest.approx(100 - breakdown.persistence_fraction_percent)
        assert breakdown.c_loss_tco2e == pytest.approx(7.495, abs=1e-3)
        assert breakdown.m == 89.10

    def test_range_decreases_with_ratio(self):
        pairs = estimate_persistence_range(15.0)

        assert [ratio for ratio, _ in pairs] == [0.3, 0.4, 0.5, 0.6, 0.7]
        fractions = [pf for _, pf in pairs]
        assert fractions == sorted(fractions, reverse=True)
