# -*- coding: utf-8 -*-
"""
Quick CORC estimate without full LCA data.

Uses a flat emissions allowance of 20% of C_stored (the conservative end of
the typical 15-20% range). The figure is indicative only and is never used
by CORCCalculator or for issuance.
"""

import logging
from dataclasses import dataclass, asdict
from typing import Any, Dict

from biochar_corc.carbon_stored import calculate_c_stored
from biochar_corc.constants import ESTIMATE_EMISSIONS_FRACTION
from biochar_corc.persistence import calculate_c_loss, calculate_persistence_fraction
from biochar_corc.quality import calculate_h_corg_ratio

logger = logging.getLogger(__name__)

ESTIMATE_NOTE = (
    "This is an estimate using conservative emission assumptions "
    f"({ESTIMATE_EMISSIONS_FRACTION:.0%} of C_stored). "
    "Full LCA calculation required for actual CORC issuance."
)


@dataclass(frozen=True)
class CORCEstimate:
    """Non-normative CORC estimate."""
    estimated_corcs_tco2e: float
    c_stored_tco2e: float
    c_loss_tco2e: float
    estimated_emissions_tco2e: float
    h_corg_ratio: float
    persistence_fraction_percent: float
    note: str = ESTIMATE_NOTE

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def estimate_corcs(
    dry_mass_tonnes: float,
    organic_carbon_percent: float,
    hydrogen_percent: float,
    mean_soil_temp_c: float,
) -> CORCEstimate:
    """
    Estimate net CORCs from composition and soil temperature alone.

    Raises:
        DomainError: Propagated from the strict sub-models (including an
            H/C_org ratio above 0.7)
    """
    ratio = calculate_h_corg_ratio(hydrogen_percent, organic_carbon_percent)
    c_stored = calculate_c_stored(dry_mass_tonnes, organic_carbon_percent)
    pf = calculate_persistence_fraction(ratio, mean_soil_temp_c).persistence_fraction_percent
    c_loss = calculate_c_loss(c_stored, pf)

    estimated_emissions = c_stored * ESTIMATE_EMISSIONS_FRACTION
    estimated = max(0.0, c_stored - c_loss - estimated_emissions)

    logger.debug("Estimated CORCs: %.4f tCO2e (non-normative)", estimated)

    return CORCEstimate(
        estimated_corcs_tco2e=estimated,
        c_stored_tco2e=c_stored,
        c_loss_tco2e=c_loss,
        estimated_emissions_tco2e=estimated_emissions,
        h_corg_ratio=ratio,
        persistence_fraction_percent=pf,
    )
