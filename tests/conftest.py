# -*- coding: utf-8 -*-
"""Pytest configuration and shared fixtures."""

import os

import pytest

from biochar_corc.config import CORCConfig, reset_config
from biochar_corc.models import (
    BaselineScenario,
    BiocharComposition,
    CORCInput,
    EndUseCategory,
    EndUseContext,
    LeakageInput,
    ProjectEmissionsInput,
)


@pytest.fixture(autouse=True)
def _isolated_config(monkeypatch):
    """Every test starts from a default config with no BIOCHAR_CORC_ overrides."""
    for name in list(os.environ):
        if name.startswith("BIOCHAR_CORC_"):
            monkeypatch.delenv(name)
    reset_config()
    yield
    reset_config()


@pytest.fixture
def default_config():
    return CORCConfig()


def make_input(
    dry_mass_tonnes=10.0,
    organic_carbon_percent=80.0,
    hydrogen_percent=3.0,
    mean_soil_temp_c=15.0,
    end_use_category=EndUseCategory.SOIL_AGRICULTURE,
    baseline=None,
    project_emissions=None,
    leakage=None,
):
    """Build a CORCInput around the reference composition (10 t, 80% C_org, 3% H)."""
    return CORCInput(
        composition=BiocharComposition(
            dry_mass_tonnes=dry_mass_tonnes,
            organic_carbon_percent=organic_carbon_percent,
            hydrogen_percent=hydrogen_percent,
        ),
        end_use=EndUseContext(mean_soil_temp_c=mean_soil_temp_c, category=end_use_category),
        baseline=baseline or BaselineScenario(),
        project_emissions=project_emissions or ProjectEmissionsInput.zero(),
        leakage=leakage or LeakageInput.zero(),
    )


@pytest.fixture
def scenario_a_input():
    """10 t, 80% C_org, 3% H, 15 °C, no emissions, leakage or baseline."""
    return make_input()


@pytest.fixture
def ineligible_input():
    """Same composition with 8% H: H/C_org = 1.2."""
    return make_input(hydrogen_percent=8.0)


@pytest.fixture
def input_factory():
    """make_input() as a fixture, for per-test variations."""
    return make_input
