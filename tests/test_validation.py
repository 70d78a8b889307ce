# -*- coding: utf-8 -*-
"""Tests for lenient input validation."""

import pytest

from biochar_corc.config import CORCConfig
from biochar_corc.models import BaselineScenario, BaselineType, EndUseCategory, ProjectEmissionsInput
from biochar_corc.quality import calculate_h_corg_ratio
from biochar_corc.validation import validate_input


class TestValidInput:

    def test_reference_input_is_clean(self, scenario_a_input):
        report = validate_input(scenario_a_input)

        assert report.is_valid is True
        assert report.errors == ()
        assert report.warnings == ()


class TestErrors:

    def test_ineligible_ratio_reported_not_raised(self, ineligible_input):
        report = validate_input(ineligible_input)

        assert report.is_valid is False
        assert any("exceeds threshold" in e for e in report.errors)

    @pytest.mark.parametrize("mass", [0.0, -2.0])
    def test_non_positive_mass(self, input_factory, mass):
        report = validate_input(input_factory(dry_mass_tonnes=mass))

        assert report.is_valid is False
        assert any("dry mass" in e for e in report.errors)

    @pytest.mark.parametrize("organic", [0.0, 100.5])
    def test_organic_carbon_out_of_range(self, input_factory, organic):
        report = validate_input(input_factory(organic_carbon_percent=organic))

        assert any("Organic carbon" in e for e in report.errors)
        assert "Unable to calculate H/C_org ratio" in report.errors

    def test_hydrogen_out_of_range(self, input_factory):
        report = validate_input(input_factory(hydrogen_percent=101.0))

        assert any("Hydrogen" in e for e in report.errors)
        assert report.is_valid is False

    def test_errors_accumulate(self, input_factory):
        report = validate_input(input_factory(dry_mass_tonnes=0.0, organic_carbon_percent=0.0))
        assert len(report.errors) >= 3


    def test_reported_ratio_matches_quality_check(self, input_factory):
        report = validate_input(input_factory(hydrogen_percent=8.0))

        expected = calculate_h_corg_ratio(8.0, 80.0)
        assert f"H/C_org ratio ({expected:.3f}) exceeds threshold of 0.7" in report.errors

    def test_zero_organic_carbon_not_computable(self, input_factory):
        report = validate_input(input_factory(organic_carbon_percent=0.0))

        assert "Unable to calculate H/C_org ratio" in report.errors


class TestWarnings:

    def test_near_threshold_ratio(self, input_factory):
        # 4.2 / 80 × 12 = 0.63
        report = validate_input(input_factory(hydrogen_percent=4.2))

        assert report.is_valid is True
        assert any("close to threshold" in w for w in report.warnings)

    def test_near_threshold_level_is_configurable(self, input_factory):
        report = validate_input(
            input_factory(hydrogen_percent=4.2),
            CORCConfig(near_threshold_warning_ratio=0.65),
        )
        assert report.warnings == ()

    @pytest.mark.parametrize("temperature,text", [(5.0, "below 7"), (45.0, "above 40")])
    def test_temperature_outside_table(self, input_factory, temperature, text):
        report = validate_input(input_factory(mean_soil_temp_c=temperature))

        assert report.is_valid is True
        assert any(text in w for w in report.warnings)

    @pytest.mark.parametrize("category", [
        EndUseCategory.CONSTRUCTION_CONCRETE,
        EndUseCategory.OTHER,
    ])
    def test_non_soil_end_use(self, input_factory, category):
        report = validate_input(input_factory(end_use_category=category))

        assert report.is_valid is True
        assert any(
            "not a soil application" in w and category.value in w for w in report.warnings
        )

    def test_soil_end_use_has_no_end_use_warning(self, input_factory):
        report = validate_input(input_factory(end_use_category=EndUseCategory.SOIL_FORESTRY))

        assert report.warnings == ()

    @pytest.mark.parametrize("storage", [None, 0.0])
    def test_charcoal_repurpose_without_baseline(self, input_factory, storage):
        report = validate_input(input_factory(
            baseline=BaselineScenario(
                baseline_type=BaselineType.CHARCOAL_REPURPOSE,
                baseline_carbon_storage_tco2e=storage,
            ),
        ))
        assert any("baseline carbon storage" in w for w in report.warnings)

    def test_charcoal_repurpose_with_baseline(self, input_factory):
        report = validate_input(input_factory(
            baseline=BaselineScenario(
                baseline_type=BaselineType.CHARCOAL_REPURPOSE,
                baseline_carbon_storage_tco2e=3.0,
            ),
        ))
        assert report.warnings == ()

    @pytest.mark.parametrize("factor", [None, 1.5, 0.0])
    def test_allocation_factor_defaulted(self, input_factory, factor):
        report = validate_input(input_factory(
            project_emissions=ProjectEmissionsInput(co_product_allocation_factor=factor),
        ))
        assert any("allocation factor" in w for w in report.warnings)

    def test_report_to_dict(self, scenario_a_input):
        assert validate_input(scenario_a_input).to_dict() == {
            "is_valid": True,
            "errors": [],
            "warnings": [],
        }
