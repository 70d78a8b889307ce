# -*- coding: utf-8 -*-
"""
CORC Calculator (Equation 5.1)

Net CO2 Removal Certificates for one monitoring period:

    CORCs = C_stored − C_baseline − C_loss − E_project − E_leakage

GUARANTEES:
- Deterministic: same CORCInput → same CORCResult, bit for bit
- Reproducible: SHA-256 provenance hash over inputs, steps and outputs
- Auditable: ordered formula trail for every term
- Never negative: the net is floored at 0 and the floor is reported

Calculation Steps:
1. H/C_org ratio and eligibility (an ineligible ratio is reported, not raised)
2. C_stored
3. C_baseline from the baseline scenario
4. Persistence fraction (Table 6.1)
5. C_loss
6. E_project with the resolved co-product allocation factor
7. E_leakage
8. Net CORCs, floored at 0
"""

import logging
from dataclasses import dataclass, asdict, field
from typing import Any, Dict, List, Optional, Tuple

from biochar_corc.carbon_stored import (
    CStoredBreakdown,
    c_stored_breakdown,
    calculate_c_stored,
)
from biochar_corc.config import CORCConfig, get_config
from biochar_corc.constants import CALCULATION_VERSION, KG_PER_TONNE
from biochar_corc.leakage import (
    LeakageBreakdownResult,
    calculate_e_leakage,
    ecological_total,
    leakage_breakdown,
    market_activity_total,
)
from biochar_corc.models import BaselineScenario, BaselineType, CORCInput
from biochar_corc.persistence import (
    PersistenceBreakdown,
    calculate_c_loss,
    calculate_persistence_fraction,
    get_persistence_coefficients,
    persistence_breakdown,
)
from biochar_corc.project_emissions import (
    ProjectEmissionsBreakdown,
    biomass_total,
    calculate_e_project,
    embodied_total,
    end_use_total,
    production_total,
    project_emissions_breakdown,
    resolve_allocation_factor,
)
from biochar_corc.provenance import FormulaStep, ProvenanceTracker
from biochar_corc.quality import QualityTier, calculate_h_corg_ratio, classify, is_eligible

logger = logging.getLogger(__name__)


# =============================================================================
# RESULT STRUCTURES
# =============================================================================

@dataclass(frozen=True)
class CORCBreakdown:
    """E_project and E_leakage split into their groups, tCO2e."""
    biomass_emissions_tco2e: float
    production_emissions_tco2e: float
    embodied_emissions_tco2e: float
    end_use_emissions_tco2e: float
    ecological_leakage_tco2e: float
    market_leakage_tco2e: float

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class CORCResult:
    """
    Complete, self-describing outcome of one CORC calculation.

    This is the record callers persist. It embeds the calculation version
    and a provenance hash so the figure can be re-derived and checked later.
    """
    # Quality
    h_corg_ratio: float
    quality_valid: bool
    quality_tier: QualityTier

    # Formula terms (tCO2e)
    c_stored_tco2e: float
    c_baseline_tco2e: float
    c_loss_tco2e: float
    e_project_tco2e: float
    e_leakage_tco2e: float

    # Persistence
    persistence_fraction_percent: float
    persistence_defined: bool
    temperature_used_c: int
    temperature_clamped: bool

    co_product_allocation_factor: float

    # Result
    unclamped_net_tco2e: float
    net_corcs_tco2e: float
    net_clamped: bool

    # Metadata
    permanence_type: str
    calculation_version: str
    breakdown: CORCBreakdown
    formula_steps: Tuple[FormulaStep, ...] = field(default_factory=tuple)
    warnings: Tuple[str, ...] = field(default_factory=tuple)
    calculation_id: str = ""
    provenance_hash: str = ""

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for storage or transport."""
        return {
            "h_corg_ratio": self.h_corg_ratio,
            "quality_valid": self.quality_valid,
            "quality_tier": self.quality_tier.value,
            "c_stored_tco2e": self.c_stored_tco2e,
            "c_baseline_tco2e": self.c_baseline_tco2e,
            "c_loss_tco2e": self.c_loss_tco2e,
            "e_project_tco2e": self.e_project_tco2e,
            "e_leakage_tco2e": self.e_leakage_tco2e,
            "persistence_fraction_percent": self.persistence_fraction_percent,
            "persistence_defined": self.persistence_defined,
            "temperature_used_c": self.temperature_used_c,
            "temperature_clamped": self.temperature_clamped,
            "co_product_allocation_factor": self.co_product_allocation_factor,
            "unclamped_net_tco2e": self.unclamped_net_tco2e,
            "net_corcs_tco2e": self.net_corcs_tco2e,
            "net_clamped": self.net_clamped,
            "permanence_type": self.permanence_type,
            "calculation_version": self.calculation_version,
            "breakdown": self.breakdown.to_dict(),
            "formula_steps": [step.to_dict() for step in self.formula_steps],
            "warnings": list(self.warnings),
            "calculation_id": self.calculation_id,
            "provenance_hash": self.provenance_hash,
        }


@dataclass(frozen=True)
class CORCCalculationBreakdown:
    """A result together with every sub-model breakdown, for audit display."""
    result: CORCResult
    c_stored: CStoredBreakdown
    persistence: Optional[PersistenceBreakdown]
    project_emissions: ProjectEmissionsBreakdown
    leakage: LeakageBreakdownResult

    def to_dict(self) -> Dict[str, Any]:
        return {
            "result": self.result.to_dict(),
            "c_stored": self.c_stored.to_dict(),
            "persistence": self.persistence.to_dict() if self.persistence else None,
            "project_emissions": self.project_emissions.to_dict(),
            "leakage": self.leakage.to_dict(),
        }


# =============================================================================
# FORMULA HELPERS
# =============================================================================

def calculate_net_corcs(
    c_stored_tco2e: float,
    c_baseline_tco2e: float,
    c_loss_tco2e: float,
    e_project_tco2e: float,
    e_leakage_tco2e: float,
) -> Tuple[float, float]:
    """
    Equation 5.1 with the floor at zero.

    Returns:
        Tuple of (net CORCs >= 0, unclamped net)
    """
    unclamped = (
        c_stored_tco2e
        - c_baseline_tco2e
        - c_loss_tco2e
        - e_project_tco2e
        - e_leakage_tco2e
    )
    return max(0.0, unclamped), unclamped


def resolve_baseline(baseline: BaselineScenario) -> Tuple[float, Optional[str]]:
    """
    C_baseline for a baseline scenario.

    New-built and retrofit facilities store nothing in the baseline. A
    repurposed charcoal kiln subtracts its prior storage; when that value is
    missing, 0 is used and a warning is returned.

    Returns:
        Tuple of (C_baseline in tCO2e, warning or None)
    """
    if baseline.baseline_type is not BaselineType.CHARCOAL_REPURPOSE:
        return 0.0, None

    storage = baseline.baseline_carbon_storage_tco2e
    if storage is None:
        return 0.0, (
            "Charcoal repurpose baseline has no baseline carbon storage value; "
            "using 0 tCO2e"
        )
    return float(storage), None


# =============================================================================
# CALCULATOR
# =============================================================================

class CORCCalculator:
    """
    Deterministic CORC quantification engine.

    Configuration is read once at construction; the calculator holds no
    other state and is safe to share between threads.

    Example:
        >>> calculator = CORCCalculator()
        >>> result = calculator.calculate(inputs)
        >>> print(f"Net CORCs: {result.net_corcs_tco2e:.3f} tCO2e")
    """

    NAME = "corc_net"
    VERSION = CALCULATION_VERSION

    def __init__(self, config: Optional[CORCConfig] = None):
        """
        Initialize calculator.

        Args:
            config: Engine configuration (defaults to get_config())
        """
        self.config = config or get_config()

    def calculate(self, inputs: CORCInput) -> CORCResult:
        """
        Calculate net CORCs for one monitoring period.

        Args:
            inputs: Composition, end use, baseline, emissions and leakage

        Returns:
            CORCResult with all terms, formula trail and provenance hash

        Raises:
            DomainError: If composition values are physically impossible
                (negative mass, organic carbon <= 0 or above 100%)
        """
        warnings: List[str] = []
        composition = inputs.composition
        tracker = ProvenanceTracker(self.NAME, self.VERSION)
        tracker.start(inputs.model_dump(mode="json"))

        # Step 1: H/C_org ratio and eligibility
        ratio = calculate_h_corg_ratio(
            composition.hydrogen_percent, composition.organic_carbon_percent,
        )
        quality_valid = is_eligible(ratio)
        tracker.add_step(
            description="Calculate H/C_org ratio",
            formula="H/C_org = (m_H / m_C_org) × 12.0",
            output_name="h_corg_ratio",
            value=ratio,
            unit="molar ratio",
            inputs={
                "hydrogen_percent": composition.hydrogen_percent,
                "organic_carbon_percent": composition.organic_carbon_percent,
            },
        )

        # Step 2: C_stored
        c_stored = calculate_c_stored(
            composition.dry_mass_tonnes, composition.organic_carbon_percent,
        )
        tracker.add_step(
            description="Calculate C_stored",
            formula="C_stored = Q_biochar × C_org × (44/12)",
            output_name="c_stored_tco2e",
            value=c_stored,
            unit="tCO2e",
            inputs={
                "dry_mass_tonnes": composition.dry_mass_tonnes,
                "organic_carbon_percent": composition.organic_carbon_percent,
            },
        )

        # Step 3: C_baseline
        c_baseline, baseline_warning = resolve_baseline(inputs.baseline)
        if baseline_warning:
            warnings.append(baseline_warning)
        tracker.add_step(
            description="Determine C_baseline",
            formula=f"Baseline type: {inputs.baseline.baseline_type.value}",
            output_name="c_baseline_tco2e",
            value=c_baseline,
            unit="tCO2e",
        )

        # Step 4: Persistence fraction
        temperature = inputs.end_use.mean_soil_temp_c
        if quality_valid:
            persistence = calculate_persistence_fraction(ratio, temperature)
            pf = persistence.persistence_fraction_percent
            temperature_used = persistence.temperature_used_c
            temperature_clamped = persistence.temperature_clamped
            pf_formula = f"PF = {persistence.m} - {persistence.a} × H/C_org"
        else:
            _, temperature_used, temperature_clamped = get_persistence_coefficients(temperature)
            pf = 0.0
            pf_formula = "PF undefined for H/C_org > 0.7; PF = 0"
            warnings.append(
                f"H/C_org ratio ({ratio:.3f}) exceeds eligibility threshold; "
                f"persistence undefined, all stored carbon counted as lost"
            )
        if temperature_clamped:
            warnings.append(
                f"Soil temperature {temperature}°C outside 7-40°C range; "
                f"coefficients for {temperature_used}°C used"
            )
        tracker.add_step(
            description="Calculate Persistence Fraction",
            formula=pf_formula,
            output_name="persistence_fraction_percent",
            value=pf,
            unit="%",
            inputs={
                "h_corg_ratio": ratio,
                "mean_soil_temp_c": temperature,
                "temperature_used_c": temperature_used,
            },
        )

        # Step 5: C_loss (all of C_stored when persistence is undefined)
        c_loss = calculate_c_loss(c_stored, pf) if quality_valid else c_stored
        tracker.add_step(
            description="Calculate C_loss",
            formula="C_loss = C_stored × (100 - PF) / 100",
            output_name="c_loss_tco2e",
            value=c_loss,
            unit="tCO2e",
        )

        # Step 6: E_project
        emissions = inputs.project_emissions
        allocation_factor, defaulted = resolve_allocation_factor(
            emissions.co_product_allocation_factor,
        )
        if defaulted:
            warnings.append(
                "Co-product allocation factor missing or outside (0, 1]; "
                "all production emissions allocated to biochar (1.0)"
            )
        e_project = calculate_e_project(emissions, allocation_factor)
        tracker.add_step(
            description="Calculate E_project",
            formula="E_project = E_biomass + E_production × AF + E_use + E_emb",
            output_name="e_project_tco2e",
            value=e_project,
            unit="tCO2e",
            inputs={"co_product_allocation_factor": allocation_factor},
        )

        # Step 7: E_leakage
        e_leakage = calculate_e_leakage(inputs.leakage)
        tracker.add_step(
            description="Calculate E_leakage",
            formula="E_leakage = L_ECO + L_MA",
            output_name="e_leakage_tco2e",
            value=e_leakage,
            unit="tCO2e",
        )

        # Step 8: Net CORCs
        net, unclamped = calculate_net_corcs(c_stored, c_baseline, c_loss, e_project, e_leakage)
        net_clamped = unclamped < 0
        if net_clamped:
            warnings.append(
                f"Deductions exceed C_stored; net CORCs floored at 0 "
                f"(unclamped {unclamped:.3f} tCO2e)"
            )
        tracker.add_step(
            description="Calculate Net CORCs",
            formula="CORCs = max(0, C_stored - C_baseline - C_loss - E_project - E_leakage)",
            output_name="net_corcs_tco2e",
            value=net,
            unit="tCO2e",
            inputs={"unclamped_net_tco2e": unclamped},
        )

        breakdown = CORCBreakdown(
            biomass_emissions_tco2e=biomass_total(emissions.biomass) / KG_PER_TONNE,
            production_emissions_tco2e=(
                production_total(emissions.production) * allocation_factor / KG_PER_TONNE
            ),
            embodied_emissions_tco2e=embodied_total(emissions.embodied) / KG_PER_TONNE,
            end_use_emissions_tco2e=end_use_total(emissions.end_use) / KG_PER_TONNE,
            ecological_leakage_tco2e=ecological_total(inputs.leakage.ecological) / KG_PER_TONNE,
            market_leakage_tco2e=(
                market_activity_total(inputs.leakage.market_activity) / KG_PER_TONNE
            ),
        )

        provenance = tracker.complete({
            "net_corcs_tco2e": net,
            "unclamped_net_tco2e": unclamped,
            "permanence_type": self.config.permanence_type,
            "warnings": warnings,
        })

        logger.debug(
            "CORC calculation %s: net=%.4f tCO2e (stored=%.4f loss=%.4f project=%.4f leakage=%.4f)",
            provenance.calculation_id, net, c_stored, c_loss, e_project, e_leakage,
        )

        return CORCResult(
            h_corg_ratio=ratio,
            quality_valid=quality_valid,
            quality_tier=classify(ratio),
            c_stored_tco2e=c_stored,
            c_baseline_tco2e=c_baseline,
            c_loss_tco2e=c_loss,
            e_project_tco2e=e_project,
            e_leakage_tco2e=e_leakage,
            persistence_fraction_percent=pf,
            persistence_defined=quality_valid,
            temperature_used_c=temperature_used,
            temperature_clamped=temperature_clamped,
            co_product_allocation_factor=allocation_factor,
            unclamped_net_tco2e=unclamped,
            net_corcs_tco2e=net,
            net_clamped=net_clamped,
            permanence_type=self.config.permanence_type,
            calculation_version=self.VERSION,
            breakdown=breakdown,
            formula_steps=provenance.steps if self.config.include_formula_steps else (),
            warnings=tuple(warnings),
            calculation_id=provenance.calculation_id,
            provenance_hash=provenance.provenance_hash,
        )

    def calculate_with_breakdown(self, inputs: CORCInput) -> CORCCalculationBreakdown:
        """Calculate and attach every sub-model breakdown."""
        result = self.calculate(inputs)
        composition = inputs.composition

        persistence = None
        if result.persistence_defined:
            persistence = persistence_breakdown(
                result.h_corg_ratio, inputs.end_use.mean_soil_temp_c, result.c_stored_tco2e,
            )

        return CORCCalculationBreakdown(
            result=result,
            c_stored=c_stored_breakdown(
                composition.dry_mass_tonnes, composition.organic_carbon_percent,
            ),
            persistence=persistence,
            project_emissions=project_emissions_breakdown(inputs.project_emissions),
            leakage=leakage_breakdown(inputs.leakage),
        )


def calculate_corcs(inputs: CORCInput, config: Optional[CORCConfig] = None) -> CORCResult:
    """Module-level convenience wrapper around CORCCalculator.calculate()."""
    return CORCCalculator(config).calculate(inputs)
