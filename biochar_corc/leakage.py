# -*- coding: utf-8 -*-
"""
Leakage Model (Section 8, Equation 8.1)

Emissions the project causes outside its direct boundary.

Formulas:
    E_leakage = L_ECO + L_MA                              (Equation 8.1)
    L_ECO     = facility + biomass sourcing area
    L_MA      = AFOLU + energy/material market + iLUC
    iLUC      = Q × (LHV × 1000) × iLUC_factor × AF       (Section 8.6)

Where for iLUC:
    Q:           Feedstock quantity (dry tonnes)
    LHV:         Lower heating value (GJ per dry tonne)
    iLUC_factor: kg CO2e per MJ (Table 8.3)
    AF:          Attribution factor (0-1)

The risk triage helpers at the bottom are qualitative and are used by the
surrounding workflow, never by the numeric formula.
"""

import logging
from dataclasses import dataclass, asdict, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from biochar_corc.checks import require_between, require_non_negative
from biochar_corc.constants import (
    BIOMASS_CATEGORIES,
    HIGH_ILUC_RISK_CATEGORIES,
    HIGH_ILUC_RISK_FEEDSTOCKS,
    ILUC_FACTORS,
    KG_PER_TONNE,
    MJ_PER_GJ,
    WASTE_RESIDUE_CATEGORIES,
)
from biochar_corc.exceptions import DomainError
from biochar_corc.models import (
    EcologicalLeakage,
    ILUCInput,
    LeakageInput,
    MarketActivityLeakage,
)

logger = logging.getLogger(__name__)


class RiskLevel(str, Enum):
    """Qualitative leakage risk."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


_RISK_ORDER = {RiskLevel.LOW: 0, RiskLevel.MEDIUM: 1, RiskLevel.HIGH: 2}


@dataclass(frozen=True)
class LeakageBreakdownResult:
    """Every leakage term in kg CO2e plus the tCO2e total."""
    ecological_leakage_kg_co2e: float
    facility_kg_co2e: float
    biomass_sourcing_kg_co2e: float
    market_activity_leakage_kg_co2e: float
    afolu_kg_co2e: float
    energy_material_kg_co2e: float
    iluc_kg_co2e: float
    total_leakage_kg_co2e: float
    total_leakage_tco2e: float

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class LeakageRiskAssessment:
    """Outcome of assess_leakage_risk()."""
    level: RiskLevel
    requires_iluc: bool
    mitigation_required: bool
    notes: Tuple[str, ...] = field(default_factory=tuple)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "level": self.level.value,
            "requires_iluc": self.requires_iluc,
            "mitigation_required": self.mitigation_required,
            "notes": list(self.notes),
        }


# =============================================================================
# SUMS
# =============================================================================

def ecological_total(leakage: EcologicalLeakage) -> float:
    """L_ECO in kg CO2e."""
    return leakage.facility + leakage.biomass_sourcing


def market_activity_total(leakage: MarketActivityLeakage) -> float:
    """L_MA in kg CO2e."""
    return leakage.afolu + leakage.energy_material + leakage.iluc


def calculate_e_leakage(leakage: LeakageInput) -> float:
    """E_leakage in tCO2e (Equation 8.1)."""
    total_kg = ecological_total(leakage.ecological) + market_activity_total(leakage.market_activity)
    return total_kg / KG_PER_TONNE


def leakage_breakdown(leakage: LeakageInput) -> LeakageBreakdownResult:
    """All leakage terms for audit display."""
    eco_kg = ecological_total(leakage.ecological)
    market_kg = market_activity_total(leakage.market_activity)
    total_kg = eco_kg + market_kg

    return LeakageBreakdownResult(
        ecological_leakage_kg_co2e=eco_kg,
        facility_kg_co2e=leakage.ecological.facility,
        biomass_sourcing_kg_co2e=leakage.ecological.biomass_sourcing,
        market_activity_leakage_kg_co2e=market_kg,
        afolu_kg_co2e=leakage.market_activity.afolu,
        energy_material_kg_co2e=leakage.market_activity.energy_material,
        iluc_kg_co2e=leakage.market_activity.iluc,
        total_leakage_kg_co2e=total_kg,
        total_leakage_tco2e=total_kg / KG_PER_TONNE,
    )


# =============================================================================
# iLUC
# =============================================================================

def calculate_iluc(
    quantity_dry_tonnes: float,
    lower_heating_value_gj: float,
    iluc_factor_kg_co2e_per_mj: float,
    attribution_factor: float = 1.0,
) -> float:
    """
    iLUC contribution for a high-risk feedstock, in kg CO2e.

    Args:
        quantity_dry_tonnes: Feedstock quantity (dry tonnes)
        lower_heating_value_gj: Lower heating value (GJ per dry tonne)
        iluc_factor_kg_co2e_per_mj: iLUC emission factor (kg CO2e/MJ)
        attribution_factor: Share attributed to the project (0-1)

    Raises:
        DomainError: On negative quantities or attribution outside [0, 1]
    """
    quantity_dry_tonnes = require_non_negative(
        "quantity_dry_tonnes", quantity_dry_tonnes, "Quantity cannot be negative",
    )
    lower_heating_value_gj = require_non_negative(
        "lower_heating_value_gj", lower_heating_value_gj,
        "Lower heating value cannot be negative",
    )
    iluc_factor_kg_co2e_per_mj = require_non_negative(
        "iluc_factor_kg_co2e_per_mj", iluc_factor_kg_co2e_per_mj,
        "iLUC factor cannot be negative",
    )
    attribution_factor = require_between(
        "attribution_factor", attribution_factor, 0.0, 1.0,
        "Attribution factor must be between 0 and 1",
    )

    lhv_mj = lower_heating_value_gj * MJ_PER_GJ
    return quantity_dry_tonnes * lhv_mj * iluc_factor_kg_co2e_per_mj * attribution_factor


def calculate_iluc_from_input(iluc_input: ILUCInput) -> float:
    """calculate_iluc() over an ILUCInput model."""
    return calculate_iluc(
        iluc_input.quantity_dry_tonnes,
        iluc_input.lower_heating_value_gj,
        iluc_input.iluc_factor_kg_co2e_per_mj,
        iluc_input.attribution_factor,
    )


def iluc_factor_for(crop_group: str) -> float:
    """
    Table 8.3 iLUC factor (kg CO2e/MJ) for a crop group.

    Raises:
        DomainError: For an unknown crop group
    """
    key = crop_group.strip().lower()
    try:
        return ILUC_FACTORS[key]
    except KeyError:
        raise DomainError(
            f"Unknown iLUC crop group: {crop_group}",
            parameter="crop_group",
            value=crop_group,
            context={"valid_groups": sorted(ILUC_FACTORS)},
        ) from None


# =============================================================================
# RISK TRIAGE
# =============================================================================

def _normalize_category(category: str) -> str:
    code = category.strip().upper()
    if code not in BIOMASS_CATEGORIES:
        raise DomainError(
            f"Unknown Puro biomass category: {category}",
            parameter="category",
            value=category,
            valid_range="A-O",
        )
    return code


def requires_iluc_assessment(
    category: str,
    is_dedicated_crop: bool = False,
    feedstock_type: Optional[str] = None,
) -> bool:
    """
    Whether a feedstock needs iLUC quantification.

    True for high-risk categories A, B and N, for any dedicated energy
    crop, and for the named plantation feedstocks (palm, soybean). A
    dedicated crop needs no Puro category.
    """
    if is_dedicated_crop:
        return True
    code = _normalize_category(category)
    if feedstock_type is not None and feedstock_type.strip().lower() in HIGH_ILUC_RISK_FEEDSTOCKS:
        return True
    return code in HIGH_ILUC_RISK_CATEGORIES


def assess_leakage_risk(
    category: str,
    is_dedicated_crop: bool,
    has_existing_use: bool,
) -> LeakageRiskAssessment:
    """
    Qualitative leakage triage for a feedstock.

    Args:
        category: Puro biomass category (A-O); may be blank for dedicated crops
        is_dedicated_crop: Whether the feedstock is a dedicated energy crop
        has_existing_use: Whether the feedstock had an existing economic use

    Returns:
        LeakageRiskAssessment with level, iLUC requirement and notes
    """
    if is_dedicated_crop:
        code = category.strip().upper()
    else:
        code = _normalize_category(category)
    notes: List[str] = []
    level = RiskLevel.LOW

    def raise_to(target: RiskLevel) -> RiskLevel:
        return target if _RISK_ORDER[target] > _RISK_ORDER[level] else level

    if is_dedicated_crop:
        level = RiskLevel.HIGH
        notes.append("Dedicated energy crops require full iLUC assessment")
        notes.append("Must demonstrate no competition with food production")

    if code in HIGH_ILUC_RISK_CATEGORIES:
        level = raise_to(RiskLevel.MEDIUM)
        notes.append(f"Category {code} is classified as high-risk for iLUC")

    if has_existing_use:
        level = raise_to(RiskLevel.MEDIUM)
        notes.append("Feedstock with existing economic use may cause market displacement")

    if code in WASTE_RESIDUE_CATEGORIES and not has_existing_use:
        notes.append("Waste/residue category with no existing use - low leakage risk")

    return LeakageRiskAssessment(
        level=level,
        requires_iluc=requires_iluc_assessment(code, is_dedicated_crop),
        mitigation_required=level is not RiskLevel.LOW,
        notes=tuple(notes),
    )
