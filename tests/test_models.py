# -*- coding: utf-8 -*-
"""Tests for the pydantic input models."""

import pytest
from pydantic import ValidationError

from biochar_corc.models import (
    BiocharComposition,
    CORCInput,
    EndUseCategory,
    EndUseContext,
    EndUseGroup,
    LeakageInput,
)


class TestBiocharComposition:

    def test_organic_carbon_derived_from_total(self):
        composition = BiocharComposition(
            dry_mass_tonnes=10.0,
            hydrogen_percent=3.0,
            total_carbon_percent=85.0,
            inorganic_carbon_percent=5.0,
        )
        assert composition.organic_carbon_percent == pytest.approx(80.0)

    def test_consistent_carbon_fractions_accepted(self):
        composition = BiocharComposition(
            dry_mass_tonnes=10.0,
            hydrogen_percent=3.0,
            organic_carbon_percent=78.0,
            total_carbon_percent=85.0,
            inorganic_carbon_percent=7.0,
        )
        assert composition.organic_carbon_percent == 78.0

    def test_organic_carbon_contradicting_total_rejected(self):
        with pytest.raises(ValidationError, match="does not match"):
            BiocharComposition(
                dry_mass_tonnes=10.0,
                hydrogen_percent=3.0,
                organic_carbon_percent=80.0,
                total_carbon_percent=50.0,
                inorganic_carbon_percent=10.0,
            )

    def test_explicit_organic_with_inorganic_above_total_rejected(self):
        with pytest.raises(ValidationError):
            BiocharComposition(
                dry_mass_tonnes=10.0,
                hydrogen_percent=3.0,
                organic_carbon_percent=80.0,
                total_carbon_percent=5.0,
                inorganic_carbon_percent=10.0,
            )

    def test_carbon_content_required(self):
        with pytest.raises(ValidationError):
            BiocharComposition(dry_mass_tonnes=10.0, hydrogen_percent=3.0)

    def test_inorganic_above_total_rejected(self):
        with pytest.raises(ValidationError):
            BiocharComposition(
                dry_mass_tonnes=10.0,
                hydrogen_percent=3.0,
                total_carbon_percent=5.0,
                inorganic_carbon_percent=10.0,
            )

    def test_out_of_range_values_load(self):
        # Range checks belong to validate_input and the strict functions
        composition = BiocharComposition(
            dry_mass_tonnes=0.0, organic_carbon_percent=120.0, hydrogen_percent=3.0,
        )
        assert composition.organic_carbon_percent == 120.0

    def test_frozen(self):
        composition = BiocharComposition(
            dry_mass_tonnes=10.0, organic_carbon_percent=80.0, hydrogen_percent=3.0,
        )
        with pytest.raises(ValidationError):
            composition.dry_mass_tonnes = 20.0

    def test_unknown_field_rejected(self):
        with pytest.raises(ValidationError):
            BiocharComposition(
                dry_mass_tonnes=10.0,
                organic_carbon_percent=80.0,
                hydrogen_percent=3.0,
                ash_percent=12.0,
            )


class TestEndUse:

    @pytest.mark.parametrize("category,group", [
        (EndUseCategory.SOIL_AGRICULTURE, EndUseGroup.SOIL),
        (EndUseCategory.SOIL_URBAN, EndUseGroup.SOIL),
        (EndUseCategory.CONSTRUCTION_CONCRETE, EndUseGroup.CONSTRUCTION),
        (EndUseCategory.OTHER, EndUseGroup.OTHER),
    ])
    def test_category_group(self, category, group):
        assert category.group is group

    def test_soil_temperature_relevance(self):
        assert EndUseCategory.SOIL_FORESTRY.requires_soil_temperature is True
        assert EndUseCategory.CONSTRUCTION_ASPHALT.requires_soil_temperature is False

    def test_negative_depth_rejected(self):
        with pytest.raises(ValidationError):
            EndUseContext(mean_soil_temp_c=15.0, incorporation_depth_cm=-1.0)


class TestCORCInput:

    def test_json_round_trip(self, scenario_a_input):
        restored = CORCInput.model_validate_json(scenario_a_input.model_dump_json())
        assert restored == scenario_a_input

    def test_defaults(self):
        inputs = CORCInput.model_validate({
            "composition": {
                "dry_mass_tonnes": 1.0,
                "organic_carbon_percent": 70.0,
                "hydrogen_percent": 2.0,
            },
            "end_use": {"mean_soil_temp_c": 12.0},
        })

        assert inputs.baseline.baseline_type.value == "new_built"
        assert inputs.leakage == LeakageInput.zero()
        assert inputs.project_emissions.co_product_allocation_factor is None
