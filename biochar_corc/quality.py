# -*- coding: utf-8 -*-
"""
Biochar Quality Model (Section 3.5, Equation 6.5)

The H/C_org molar ratio is the methodology's proxy for the degree of
carbonization: lower values mean more complete carbonization and a more
stable product.

Formula:
    H/C_org = (m_H / m_C_org) × 12.0

Eligibility:
    H/C_org <= 0.7

The tier classification is informational and never feeds the numeric
pipeline.
"""

import logging
from dataclasses import dataclass, asdict
from enum import Enum
from typing import Any, Dict

from biochar_corc.checks import require_finite
from biochar_corc.constants import H_C_MOLAR_FACTOR, H_C_ORG_THRESHOLD, QUALITY_TIER_BOUNDS
from biochar_corc.exceptions import DomainError

logger = logging.getLogger(__name__)


class QualityTier(str, Enum):
    """Banded H/C_org classification."""
    EXCELLENT = "excellent"
    VERY_GOOD = "very_good"
    GOOD = "good"
    ACCEPTABLE = "acceptable"
    INELIGIBLE = "ineligible"

    @property
    def description(self) -> str:
        return _TIER_DESCRIPTIONS[self]


_TIER_DESCRIPTIONS = {
    QualityTier.EXCELLENT: "Excellent - High stability (H/C_org <= 0.4)",
    QualityTier.VERY_GOOD: "Very Good - Good stability (H/C_org <= 0.5)",
    QualityTier.GOOD: "Good - Moderate stability (H/C_org <= 0.6)",
    QualityTier.ACCEPTABLE: "Acceptable - Minimum stability (H/C_org <= 0.7)",
    QualityTier.INELIGIBLE: "Ineligible - Below threshold (H/C_org > 0.7)",
}


@dataclass(frozen=True)
class QualityValidationResult:
    """
    Detailed quality check.

    Attributes:
        h_corg_ratio: H/C_org molar ratio
        is_valid: Whether the ratio passes the eligibility threshold
        threshold: Threshold applied
        tier: Informational quality tier
        message: Human-readable outcome
    """
    h_corg_ratio: float
    is_valid: bool
    threshold: float
    tier: QualityTier
    message: str

    def to_dict(self) -> Dict[str, Any]:
        d = asdict(self)
        d["tier"] = self.tier.value
        return d


def calculate_h_corg_ratio(hydrogen_percent: float, organic_carbon_percent: float) -> float:
    """
    Calculate the H/C_org molar ratio (Equation 6.5).

    Args:
        hydrogen_percent: Hydrogen mass content (%)
        organic_carbon_percent: Organic carbon mass content (%)

    Returns:
        H/C_org molar ratio

    Raises:
        DomainError: If organic carbon <= 0 or hydrogen < 0
    """
    hydrogen_percent = require_finite("hydrogen_percent", hydrogen_percent)
    organic_carbon_percent = require_finite("organic_carbon_percent", organic_carbon_percent)

    if organic_carbon_percent <= 0:
        raise DomainError(
            "Organic carbon percent must be greater than 0",
            parameter="organic_carbon_percent",
            value=organic_carbon_percent,
            valid_range="> 0",
        )
    if hydrogen_percent < 0:
        raise DomainError(
            "Hydrogen percent cannot be negative",
            parameter="hydrogen_percent",
            value=hydrogen_percent,
            valid_range=">= 0",
        )

    return (hydrogen_percent / organic_carbon_percent) * H_C_MOLAR_FACTOR


def is_eligible(h_corg_ratio: float) -> bool:
    """Return True when the ratio meets the 0.7 eligibility threshold."""
    return h_corg_ratio <= H_C_ORG_THRESHOLD


def classify(h_corg_ratio: float) -> QualityTier:
    """Map a ratio onto its informational quality tier."""
    for upper_bound, tier in QUALITY_TIER_BOUNDS:
        if h_corg_ratio <= upper_bound:
            return QualityTier(tier)
    return QualityTier.INELIGIBLE


def derive_organic_carbon(
    total_carbon_percent: float,
    inorganic_carbon_percent: float = 0.0,
) -> float:
    """
    C_org = C_tot - C_inorg

    Raises:
        DomainError: If inorganic carbon exceeds total carbon
    """
    total_carbon_percent = require_finite("total_carbon_percent", total_carbon_percent)
    inorganic_carbon_percent = require_finite("inorganic_carbon_percent", inorganic_carbon_percent)

    organic_carbon = total_carbon_percent - inorganic_carbon_percent
    if organic_carbon < 0:
        raise DomainError(
            "Organic carbon cannot be negative (inorganic > total)",
            parameter="inorganic_carbon_percent",
            value=inorganic_carbon_percent,
            context={"total_carbon_percent": total_carbon_percent},
        )
    return organic_carbon


def validate_quality(hydrogen_percent: float, organic_carbon_percent: float) -> QualityValidationResult:
    """
    Compute the ratio and report pass/fail with a display message.

    Raises:
        DomainError: Propagated from calculate_h_corg_ratio
    """
    ratio = calculate_h_corg_ratio(hydrogen_percent, organic_carbon_percent)
    valid = is_eligible(ratio)

    if valid:
        message = (
            f"Biochar passes quality threshold "
            f"(H/C_org = {ratio:.3f} <= {H_C_ORG_THRESHOLD})"
        )
    else:
        message = (
            f"Biochar fails quality threshold "
            f"(H/C_org = {ratio:.3f} > {H_C_ORG_THRESHOLD}). "
            f"Biochar must have H/C_org <= {H_C_ORG_THRESHOLD} for CORC eligibility."
        )
        logger.debug("Quality check failed: H/C_org=%.4f", ratio)

    return QualityValidationResult(
        h_corg_ratio=ratio,
        is_valid=valid,
        threshold=H_C_ORG_THRESHOLD,
        tier=classify(ratio),
        message=message,
    )
