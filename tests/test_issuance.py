# -*- coding: utf-8 -*-
"""Tests for serial numbers and CORC snapshots."""

import pytest
from pydantic import ValidationError

from biochar_corc.calculator import calculate_corcs
from biochar_corc.exceptions import DomainError
from biochar_corc.issuance import CORCSnapshot, generate_serial_number
from biochar_corc.models import BiomassEmissions, PermanenceType, ProjectEmissionsInput


class TestSerialNumber:

    def test_format(self):
        assert generate_serial_number("FIN01", 2025, 42) == "CORC-FIN01-2025-000042"

    def test_facility_code_normalized(self):
        assert generate_serial_number(" fin01 ", 2025, 1) == "CORC-FIN01-2025-000001"

    def test_max_sequence(self):
        assert generate_serial_number("A", 2030, 999_999) == "CORC-A-2030-999999"

    @pytest.mark.parametrize("facility,year,sequence", [
        ("", 2025, 1),
        ("FI-N", 2025, 1),
        ("FIN", 25, 1),
        ("FIN", True, 1),
        ("FIN", 2025, 0),
        ("FIN", 2025, 1_000_000),
        ("FIN", 2025, 1.0),
    ])
    def test_invalid_arguments_rejected(self, facility, year, sequence):
        with pytest.raises(DomainError):
            generate_serial_number(facility, year, sequence)


def _snapshot(**overrides):
    data = {
        "c_stored_tco2e": 10.0,
        "c_baseline_tco2e": 0.0,
        "c_loss_tco2e": 3.0,
        "persistence_fraction_percent": 70.0,
        "e_project_tco2e": 2.0,
        "e_leakage_tco2e": 1.0,
        "net_corcs_tco2e": 4.0,
    }
    data.update(overrides)
    return CORCSnapshot(**data)


class TestCORCSnapshot:

    def test_consistent_snapshot(self):
        snapshot = _snapshot()

        assert snapshot.formula_net_tco2e == pytest.approx(4.0)
        assert snapshot.permanence_type is PermanenceType.BC200

    def test_within_tolerance(self):
        assert _snapshot(net_corcs_tco2e=4.0009).net_corcs_tco2e == 4.0009

    def test_mismatched_net_rejected(self):
        with pytest.raises(ValidationError, match="doesn't match expected value"):
            _snapshot(net_corcs_tco2e=4.01)

    def test_clamped_net_accepted(self):
        snapshot = _snapshot(c_stored_tco2e=2.0, net_corcs_tco2e=0.0)
        assert snapshot.formula_net_tco2e == pytest.approx(-4.0)

    def test_negative_net_rejected(self):
        with pytest.raises(ValidationError, match="cannot be negative"):
            _snapshot(c_stored_tco2e=2.0, net_corcs_tco2e=-4.0)

    @pytest.mark.parametrize("field,value", [
        ("c_stored_tco2e", -1.0),
        ("c_loss_tco2e", -0.5),
        ("persistence_fraction_percent", 100.5),
    ])
    def test_out_of_range_terms_rejected(self, field, value):
        with pytest.raises(ValidationError):
            _snapshot(**{field: value})

    def test_from_result(self, scenario_a_input):
        result = calculate_corcs(scenario_a_input)
        snapshot = CORCSnapshot.from_result(result, serial_number="CORC-FIN01-2025-000001")

        assert snapshot.net_corcs_tco2e == result.net_corcs_tco2e
        assert snapshot.provenance_hash == result.provenance_hash
        assert snapshot.calculation_version == result.calculation_version

    def test_from_clamped_result(self, input_factory):
        result = calculate_corcs(input_factory(
            project_emissions=ProjectEmissionsInput(
                biomass=BiomassEmissions(transport=40000.0),
                co_product_allocation_factor=1.0,
            ),
        ))
        snapshot = CORCSnapshot.from_result(result)
        assert snapshot.net_corcs_tco2e == 0.0
