# -*- coding: utf-8 -*-
"""
Biochar CORC Quantification Engine
==================================

Converts laboratory and operational measurements of a biochar production
batch into CO2 Removal Certificates (CORCs) under the Puro.earth Biochar
Methodology, Edition 2025 V1. It supports:

- Quality: H/C_org molar ratio, eligibility threshold and quality tiers
- Carbon stored: gross tCO2e from dry mass and organic carbon
- Persistence: BC+200 persistence fraction from Table 6.1 and carbon loss
- Project emissions: four lifecycle groups with stack GWP conversion and
  co-product allocation
- Leakage: ecological and market-activity leakage, iLUC and risk triage
- Net CORCs with a formula trail and SHA-256 provenance hash
- Lenient input validation, non-normative estimates, efficiency metrics
- Thread-pool batch calculation
- Thread-safe configuration with BIOCHAR_CORC_ env prefix

Key Components:
    - quality, carbon_stored, persistence, project_emissions, leakage:
      strict sub-models that raise DomainError on out-of-range arguments
    - calculator: CORCCalculator and calculate_corcs
    - validation: validate_input, never raises
    - estimator: estimate_corcs (indicative only)
    - reporting: calculate_efficiency_metrics
    - batch: BatchCalculator
    - issuance: serial numbers and CORCSnapshot consistency checks
    - config: CORCConfig with BIOCHAR_CORC_ env prefix

Example:
    >>> from biochar_corc import CORCInput, calculate_corcs
    >>> inputs = CORCInput.model_validate({
    ...     "composition": {
    ...         "dry_mass_tonnes": 10,
    ...         "organic_carbon_percent": 80,
    ...         "hydrogen_percent": 3,
    ...     },
    ...     "end_use": {"mean_soil_temp_c": 15},
    ...     "project_emissions": {"co_product_allocation_factor": 1.0},
    ... })
    >>> result = calculate_corcs(inputs)
    >>> print(f"{result.net_corcs_tco2e:.2f}")  # 21.84
"""

__version__ = "1.0.0"

# ---------------------------------------------------------------------------
# Configuration and errors
# ---------------------------------------------------------------------------
from biochar_corc.config import CORCConfig, get_config, reset_config, set_config
from biochar_corc.constants import CALCULATION_VERSION, METHODOLOGY_EDITION
from biochar_corc.exceptions import ConfigurationError, CORCError, DomainError

# ---------------------------------------------------------------------------
# Input models
# ---------------------------------------------------------------------------
from biochar_corc.models import (
    BaselineScenario,
    BaselineType,
    BiocharComposition,
    BiomassEmissions,
    CORCInput,
    EcologicalLeakage,
    EmbodiedEmissions,
    EndUseCategory,
    EndUseContext,
    EndUseEmissions,
    EndUseGroup,
    ILUCInput,
    LeakageInput,
    MarketActivityLeakage,
    PermanenceType,
    ProductionEmissions,
    ProjectEmissionsInput,
)

# ---------------------------------------------------------------------------
# Sub-models
# ---------------------------------------------------------------------------
from biochar_corc.quality import (
    QualityTier,
    QualityValidationResult,
    calculate_h_corg_ratio,
    classify,
    derive_organic_carbon,
    is_eligible,
    validate_quality,
)
from biochar_corc.carbon_stored import (
    CStoredBreakdown,
    c_stored_breakdown,
    calculate_c_stored,
    carbon_mass,
    dry_mass_from_wet,
)
from biochar_corc.persistence import (
    PersistenceBreakdown,
    PersistenceResult,
    calculate_c_loss,
    calculate_permanent_carbon,
    calculate_persistence_fraction,
    estimate_persistence_range,
    get_persistence_coefficients,
    persistence_breakdown,
)
from biochar_corc.project_emissions import (
    ProjectEmissionsBreakdown,
    calculate_e_project,
    co_product_allocation_factor,
    project_emissions_breakdown,
    resolve_allocation_factor,
)
from biochar_corc.leakage import (
    LeakageBreakdownResult,
    LeakageRiskAssessment,
    RiskLevel,
    assess_leakage_risk,
    calculate_e_leakage,
    calculate_iluc,
    calculate_iluc_from_input,
    iluc_factor_for,
    leakage_breakdown,
    requires_iluc_assessment,
)

# ---------------------------------------------------------------------------
# Orchestration
# ---------------------------------------------------------------------------
from biochar_corc.calculator import (
    CORCBreakdown,
    CORCCalculationBreakdown,
    CORCCalculator,
    CORCResult,
    calculate_corcs,
    calculate_net_corcs,
)
from biochar_corc.validation import ValidationReport, validate_input
from biochar_corc.estimator import CORCEstimate, estimate_corcs
from biochar_corc.reporting import EfficiencyMetrics, calculate_efficiency_metrics
from biochar_corc.batch import BatchCalculator, BatchItem, BatchResult
from biochar_corc.issuance import CORCSnapshot, generate_serial_number
from biochar_corc.provenance import CalculationProvenance, FormulaStep

__all__ = [
    "__version__",
    # Configuration and errors
    "CORCConfig",
    "get_config",
    "set_config",
    "reset_config",
    "CALCULATION_VERSION",
    "METHODOLOGY_EDITION",
    "CORCError",
    "DomainError",
    "ConfigurationError",
    # Input models
    "BaselineScenario",
    "BaselineType",
    "BiocharComposition",
    "BiomassEmissions",
    "CORCInput",
    "EcologicalLeakage",
    "EmbodiedEmissions",
    "EndUseCategory",
    "EndUseContext",
    "EndUseEmissions",
    "EndUseGroup",
    "ILUCInput",
    "LeakageInput",
    "MarketActivityLeakage",
    "PermanenceType",
    "ProductionEmissions",
    "ProjectEmissionsInput",
    # Quality
    "QualityTier",
    "QualityValidationResult",
    "calculate_h_corg_ratio",
    "classify",
    "derive_organic_carbon",
    "is_eligible",
    "validate_quality",
    # Carbon stored
    "CStoredBreakdown",
    "c_stored_breakdown",
    "calculate_c_stored",
    "carbon_mass",
    "dry_mass_from_wet",
    # Persistence
    "PersistenceBreakdown",
    "PersistenceResult",
    "calculate_c_loss",
    "calculate_permanent_carbon",
    "calculate_persistence_fraction",
    "estimate_persistence_range",
    "get_persistence_coefficients",
    "persistence_breakdown",
    # Project emissions
    "ProjectEmissionsBreakdown",
    "calculate_e_project",
    "co_product_allocation_factor",
    "project_emissions_breakdown",
    "resolve_allocation_factor",
    # Leakage
    "LeakageBreakdownResult",
    "LeakageRiskAssessment",
    "RiskLevel",
    "assess_leakage_risk",
    "calculate_e_leakage",
    "calculate_iluc",
    "calculate_iluc_from_input",
    "iluc_factor_for",
    "leakage_breakdown",
    "requires_iluc_assessment",
    # Orchestration
    "CORCBreakdown",
    "CORCCalculationBreakdown",
    "CORCCalculator",
    "CORCResult",
    "calculate_corcs",
    "calculate_net_corcs",
    "ValidationReport",
    "validate_input",
    "CORCEstimate",
    "estimate_corcs",
    "EfficiencyMetrics",
    "calculate_efficiency_metrics",
    "BatchCalculator",
    "BatchItem",
    "BatchResult",
    "CORCSnapshot",
    "generate_serial_number",
    "CalculationProvenance",
    "FormulaStep",
]
