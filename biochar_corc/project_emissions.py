# -*- coding: utf-8 -*-
"""
Project Emissions Model (Section 7, Equations 7.1 & 7.2)

Aggregates lifecycle emissions of the biochar project into one tCO2e figure.

Formulas:
    E_project = E_ops + E_emb                       (Equation 7.1)
    E_ops     = E_biomass + E_production + E_use    (Equation 7.2)

Stack CH4 and N2O are converted with fixed AR5 100-year GWPs before being
summed with the terms that are already CO2e. When co-products (syngas,
bio-oil, heat) leave the system, production emissions are allocated by
energy content (Section 7.5.2.b); the allocation factor touches production
only.

Two paths for the allocation factor:
- calculate_e_project() is strict and rejects a factor outside (0, 1].
- resolve_allocation_factor() is the caller-facing convenience that
  substitutes 1.0 for a missing or invalid factor and reports doing so.
"""

import logging
from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional, Tuple

from biochar_corc.checks import require_finite, require_non_negative
from biochar_corc.constants import GWP_AR5_100YR, KG_PER_TONNE
from biochar_corc.exceptions import DomainError
from biochar_corc.models import (
    BiomassEmissions,
    EmbodiedEmissions,
    EndUseEmissions,
    ProductionEmissions,
    ProjectEmissionsInput,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProjectEmissionsBreakdown:
    """
    Detailed E_project figures, kg CO2e unless noted.

    The allocated production term, biomass, embodied and end-use terms
    sum to total_emissions_kg_co2e.
    """
    biomass_emissions_kg_co2e: float
    production_emissions_kg_co2e: float
    production_emissions_allocated_kg_co2e: float
    embodied_emissions_kg_co2e: float
    end_use_emissions_kg_co2e: float
    operational_emissions_kg_co2e: float
    total_emissions_kg_co2e: float
    total_emissions_tco2e: float
    stack_ch4_co2e_kg: float
    stack_n2o_co2e_kg: float
    co_product_allocation_factor: float
    allocation_factor_defaulted: bool

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


# =============================================================================
# GROUP TOTALS (kg CO2e)
# =============================================================================

def biomass_total(emissions: BiomassEmissions) -> float:
    """Cultivation + collection + transport + preprocessing."""
    return (
        emissions.cultivation
        + emissions.collection
        + emissions.transport
        + emissions.preprocessing
    )


def stack_gas_co2e(stack_ch4_kg: float, stack_n2o_kg: float) -> Tuple[float, float]:
    """Convert stack CH4 and N2O masses to kg CO2e."""
    return (
        stack_ch4_kg * GWP_AR5_100YR["CH4"],
        stack_n2o_kg * GWP_AR5_100YR["N2O"],
    )


def production_total(emissions: ProductionEmissions) -> float:
    """
    Production emissions with GWP conversion of stack gases.

    E_production = energy + materials + waste + CH4×28 + N2O×265
                   + fossil CO2 + maintenance
    """
    ch4_co2e, n2o_co2e = stack_gas_co2e(emissions.stack_ch4_kg, emissions.stack_n2o_kg)
    return (
        emissions.energy
        + emissions.materials
        + emissions.waste
        + ch4_co2e
        + n2o_co2e
        + emissions.fossil_co2_kg
        + emissions.maintenance
    )


def embodied_total(emissions: EmbodiedEmissions) -> float:
    """Infrastructure (amortized) + dLUC."""
    return emissions.infrastructure + emissions.dluc


def end_use_total(emissions: EndUseEmissions) -> float:
    """Transport + packaging + incorporation."""
    return emissions.transport + emissions.packaging + emissions.incorporation


# =============================================================================
# ALLOCATION
# =============================================================================

def co_product_allocation_factor(biochar_energy_mj: float, other_co_product_energy_mj: float) -> float:
    """
    Energy-content allocation factor for biochar.

    Args:
        biochar_energy_mj: Energy content of the biochar (MJ)
        other_co_product_energy_mj: Total energy content of all other co-products (MJ)

    Returns:
        Biochar share in (0, 1]; 1.0 when there is no energy to allocate

    Raises:
        DomainError: If either energy is negative
    """
    biochar_energy_mj = require_non_negative("biochar_energy_mj", biochar_energy_mj)
    other_co_product_energy_mj = require_non_negative(
        "other_co_product_energy_mj", other_co_product_energy_mj,
    )

    total_energy = biochar_energy_mj + other_co_product_energy_mj
    if total_energy <= 0:
        return 1.0
    return biochar_energy_mj / total_energy


def _is_valid_allocation_factor(factor: Optional[float]) -> bool:
    return factor is not None and 0 < factor <= 1


def resolve_allocation_factor(factor: Optional[float]) -> Tuple[float, bool]:
    """
    Caller-facing defaulting of the co-product allocation factor.

    A missing factor, or one outside (0, 1], is replaced with 1.0 (all
    production emissions allocated to biochar). A factor of 0 would wipe
    out production emissions, so it is treated as invalid too.

    Returns:
        Tuple of (factor to use, True if the default was substituted)
    """
    if _is_valid_allocation_factor(factor):
        return float(factor), False

    if factor is not None:
        logger.warning(
            "Invalid co-product allocation factor %r; defaulting to 1.0", factor,
        )
    return 1.0, True


# =============================================================================
# E_PROJECT
# =============================================================================

def calculate_e_project(emissions: ProjectEmissionsInput, allocation_factor: float) -> float:
    """
    Total project emissions in tCO2e (strict path).

    Args:
        emissions: Four-group emissions input
        allocation_factor: Co-product allocation factor, already validated by the caller

    Returns:
        E_project in tCO2e

    Raises:
        DomainError: If allocation_factor is outside (0, 1]
    """
    allocation_factor = require_finite("allocation_factor", allocation_factor)
    if not _is_valid_allocation_factor(allocation_factor):
        raise DomainError(
            "Co-product allocation factor must be in (0, 1]",
            parameter="allocation_factor",
            value=allocation_factor,
            valid_range="(0, 1]",
        )

    total_kg = (
        biomass_total(emissions.biomass)
        + production_total(emissions.production) * allocation_factor
        + embodied_total(emissions.embodied)
        + end_use_total(emissions.end_use)
    )
    return total_kg / KG_PER_TONNE


def project_emissions_breakdown(emissions: ProjectEmissionsInput) -> ProjectEmissionsBreakdown:
    """
    Reporting breakdown of E_project.

    Resolves the allocation factor with resolve_allocation_factor(), so an
    invalid factor shows up as allocation_factor_defaulted=True rather than
    an exception.
    """
    factor, defaulted = resolve_allocation_factor(emissions.co_product_allocation_factor)

    biomass_kg = biomass_total(emissions.biomass)
    production_kg = production_total(emissions.production)
    production_allocated_kg = production_kg * factor
    embodied_kg = embodied_total(emissions.embodied)
    end_use_kg = end_use_total(emissions.end_use)
    ch4_co2e, n2o_co2e = stack_gas_co2e(
        emissions.production.stack_ch4_kg, emissions.production.stack_n2o_kg,
    )

    operational_kg = biomass_kg + production_allocated_kg + end_use_kg
    total_kg = operational_kg + embodied_kg

    return ProjectEmissionsBreakdown(
        biomass_emissions_kg_co2e=biomass_kg,
        production_emissions_kg_co2e=production_kg,
        production_emissions_allocated_kg_co2e=production_allocated_kg,
        embodied_emissions_kg_co2e=embodied_kg,
        end_use_emissions_kg_co2e=end_use_kg,
        operational_emissions_kg_co2e=operational_kg,
        total_emissions_kg_co2e=total_kg,
        total_emissions_tco2e=total_kg / KG_PER_TONNE,
        stack_ch4_co2e_kg=ch4_co2e,
        stack_n2o_co2e_kg=n2o_co2e,
        co_product_allocation_factor=factor,
        allocation_factor_defaulted=defaulted,
    )
