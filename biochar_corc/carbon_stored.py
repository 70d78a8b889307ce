# -*- coding: utf-8 -*-
"""
Carbon Stored Model (Section 6.1, Equation 6.1)

Gross CO2-equivalent carbon held in the biochar before any decay losses.

Formula:
    C_stored = Q_biochar × C_org × (44/12)

Where:
    Q_biochar: Dry mass of biochar (tonnes)
    C_org:     Organic carbon content (fraction)
    44/12:     CO2/C molar mass ratio (fixed physical constant)
"""

from dataclasses import dataclass, asdict
from typing import Any, Dict

from biochar_corc.checks import require_between, require_finite, require_non_negative
from biochar_corc.constants import CO2_TO_C_RATIO
from biochar_corc.exceptions import DomainError


@dataclass(frozen=True)
class CStoredBreakdown:
    """Intermediate values of Equation 6.1 for audit display."""
    biochar_dry_mass_tonnes: float
    organic_carbon_percent: float
    carbon_fraction: float
    carbon_mass_tonnes: float
    co2_to_c_ratio: float
    c_stored_tco2e: float

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def _check_inputs(dry_mass_tonnes: float, organic_carbon_percent: float):
    dry_mass_tonnes = require_non_negative(
        "dry_mass_tonnes", dry_mass_tonnes,
        "Biochar dry mass cannot be negative",
    )
    organic_carbon_percent = require_between(
        "organic_carbon_percent", organic_carbon_percent, 0.0, 100.0,
        "Organic carbon percent must be between 0 and 100",
    )
    return dry_mass_tonnes, organic_carbon_percent


def calculate_c_stored(dry_mass_tonnes: float, organic_carbon_percent: float) -> float:
    """
    Calculate gross carbon stored in tonnes CO2e.

    Args:
        dry_mass_tonnes: Dry mass of biochar produced (tonnes)
        organic_carbon_percent: Organic carbon content (%)

    Returns:
        C_stored in tCO2e

    Raises:
        DomainError: If mass < 0 or organic carbon outside [0, 100]
    """
    dry_mass_tonnes, organic_carbon_percent = _check_inputs(dry_mass_tonnes, organic_carbon_percent)
    return dry_mass_tonnes * (organic_carbon_percent / 100) * CO2_TO_C_RATIO


def carbon_mass(dry_mass_tonnes: float, organic_carbon_percent: float) -> float:
    """Elemental organic carbon in tonnes C (no CO2 conversion)."""
    dry_mass_tonnes, organic_carbon_percent = _check_inputs(dry_mass_tonnes, organic_carbon_percent)
    return dry_mass_tonnes * (organic_carbon_percent / 100)


def dry_mass_from_wet(wet_mass_tonnes: float, moisture_percent: float) -> float:
    """
    Dry mass = Wet mass × (1 - moisture/100)

    Raises:
        DomainError: If wet mass < 0 or moisture outside [0, 100)
    """
    wet_mass_tonnes = require_non_negative(
        "wet_mass_tonnes", wet_mass_tonnes,
        "Wet mass cannot be negative",
    )
    moisture_percent = require_finite("moisture_percent", moisture_percent)
    if moisture_percent < 0 or moisture_percent >= 100:
        raise DomainError(
            "Moisture percent must be between 0 and 100",
            parameter="moisture_percent",
            value=moisture_percent,
            valid_range="[0, 100)",
        )
    return wet_mass_tonnes * (1 - moisture_percent / 100)


def c_stored_breakdown(dry_mass_tonnes: float, organic_carbon_percent: float) -> CStoredBreakdown:
    """Equation 6.1 with every intermediate value exposed."""
    dry_mass_tonnes, organic_carbon_percent = _check_inputs(dry_mass_tonnes, organic_carbon_percent)
    carbon_fraction = organic_carbon_percent / 100
    carbon_mass_tonnes = dry_mass_tonnes * carbon_fraction

    return CStoredBreakdown(
        biochar_dry_mass_tonnes=dry_mass_tonnes,
        organic_carbon_percent=organic_carbon_percent,
        carbon_fraction=carbon_fraction,
        carbon_mass_tonnes=carbon_mass_tonnes,
        co2_to_c_ratio=CO2_TO_C_RATIO,
        c_stored_tco2e=carbon_mass_tonnes * CO2_TO_C_RATIO,
    )
