# -*- coding: utf-8 -*-
"""Per-tonne and percentage figures for dashboards and reports."""

from dataclasses import dataclass, asdict
from typing import Any, Dict

from biochar_corc.calculator import CORCResult
from biochar_corc.models import CORCInput


@dataclass(frozen=True)
class EfficiencyMetrics:
    """
    Attributes:
        carbon_efficiency_percent: Net CORCs as a share of C_stored
        emission_intensity_tco2e_per_tonne: (E_project + E_leakage) per dry tonne
        net_corcs_per_tonne: Net CORCs per dry tonne
        gross_to_net_ratio_percent: (C_stored - deductions) / C_stored, floored at 0
    """
    carbon_efficiency_percent: float
    emission_intensity_tco2e_per_tonne: float
    net_corcs_per_tonne: float
    gross_to_net_ratio_percent: float

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def _ratio(numerator: float, denominator: float) -> float:
    # Zero mass or zero stored carbon yields 0.0 rather than inf/NaN
    if denominator == 0:
        return 0.0
    return numerator / denominator


def calculate_efficiency_metrics(inputs: CORCInput, result: CORCResult) -> EfficiencyMetrics:
    """Derive efficiency metrics from an input and its result."""
    dry_mass = inputs.composition.dry_mass_tonnes
    c_stored = result.c_stored_tco2e

    total_deductions = (
        result.c_baseline_tco2e
        + result.c_loss_tco2e
        + result.e_project_tco2e
        + result.e_leakage_tco2e
    )

    return EfficiencyMetrics(
        carbon_efficiency_percent=_ratio(result.net_corcs_tco2e, c_stored) * 100,
        emission_intensity_tco2e_per_tonne=_ratio(
            result.e_project_tco2e + result.e_leakage_tco2e, dry_mass,
        ),
        net_corcs_per_tonne=_ratio(result.net_corcs_tco2e, dry_mass),
        gross_to_net_ratio_percent=max(0.0, _ratio(c_stored - total_deductions, c_stored) * 100),
    )
