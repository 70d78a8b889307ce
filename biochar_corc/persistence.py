# -*- coding: utf-8 -*-
"""
BC+200 Persistence Model (Section 6.2, Equations 6.3 & 6.4)

Estimates the share of stored carbon that survives a 200-year horizon from
the biochar's H/C_org ratio and the mean annual soil temperature at the
application site, then derives the complementary carbon loss.

Formulas:
    PF     = M - a × H/C_org                 (Equation 6.4, clamped to [0, 100])
    C_loss = C_stored × (100 - PF) / 100     (Equation 6.3)

M and a come from Table 6.1, one row per whole degree from 7 °C to 40 °C.
Temperatures are rounded half-up to a whole degree and clamped into the
table range; a clamp is always reported back to the caller.

Standards Reference:
- Puro.earth Biochar Methodology Edition 2025 V1, Table 6.1
"""

import logging
import math
from dataclasses import dataclass, asdict
from typing import Any, Dict, Iterable, List, Tuple

from biochar_corc.checks import require_between, require_finite, require_non_negative
from biochar_corc.constants import (
    DEFAULT_SENSITIVITY_RATIOS,
    H_C_ORG_THRESHOLD,
    PERSISTENCE_TABLE,
    SOIL_TEMP_MAX_C,
    SOIL_TEMP_MIN_C,
    PersistenceCoefficients,
)
from biochar_corc.exceptions import DomainError

logger = logging.getLogger(__name__)


# =============================================================================
# RESULT STRUCTURES
# =============================================================================

@dataclass(frozen=True)
class PersistenceResult:
    """
    Outcome of Equation 6.4.

    Attributes:
        persistence_fraction_percent: PF after clamping to [0, 100]
        h_corg_ratio: Ratio used
        mean_soil_temp_c: Temperature as supplied
        temperature_used_c: Whole-degree table row actually used
        temperature_clamped: True if the supplied temperature was outside 7-40 °C
        m: Intercept coefficient from Table 6.1
        a: Slope coefficient from Table 6.1
    """
    persistence_fraction_percent: float
    h_corg_ratio: float
    mean_soil_temp_c: float
    temperature_used_c: int
    temperature_clamped: bool
    m: float
    a: float

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class PersistenceBreakdown:
    """Persistence and carbon loss figures for audit display."""
    h_corg_ratio: float
    mean_soil_temp_c: float
    temperature_used_c: int
    temperature_clamped: bool
    m: float
    a: float
    persistence_fraction_percent: float
    loss_percent: float
    c_stored_tco2e: float
    c_loss_tco2e: float
    permanent_carbon_tco2e: float

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


# =============================================================================
# TABLE ACCESS
# =============================================================================

def get_persistence_coefficients(
    mean_soil_temp_c: float,
) -> Tuple[PersistenceCoefficients, int, bool]:
    """
    Look up Table 6.1 coefficients for a soil temperature.

    Args:
        mean_soil_temp_c: Mean annual soil temperature (°C)

    Returns:
        Tuple of (coefficients, whole-degree temperature used, clamped flag)

    Raises:
        DomainError: If the temperature is not a finite number
    """
    mean_soil_temp_c = require_finite("mean_soil_temp_c", mean_soil_temp_c)

    # Half-up rounding; built-in round() is banker's rounding
    rounded = int(math.floor(mean_soil_temp_c + 0.5))
    temperature_used = max(SOIL_TEMP_MIN_C, min(SOIL_TEMP_MAX_C, rounded))
    clamped = mean_soil_temp_c < SOIL_TEMP_MIN_C or mean_soil_temp_c > SOIL_TEMP_MAX_C

    if clamped:
        logger.warning(
            "Soil temperature %.2f°C outside model range (%d-%d°C); using %d°C",
            mean_soil_temp_c, SOIL_TEMP_MIN_C, SOIL_TEMP_MAX_C, temperature_used,
        )

    return PERSISTENCE_TABLE[temperature_used], temperature_used, clamped


# =============================================================================
# STRICT CALCULATIONS
# =============================================================================

def _check_ratio(h_corg_ratio: float) -> float:
    h_corg_ratio = require_finite("h_corg_ratio", h_corg_ratio)
    if h_corg_ratio > H_C_ORG_THRESHOLD:
        raise DomainError(
            f"H/C_org ratio ({h_corg_ratio:.3f}) exceeds threshold of "
            f"{H_C_ORG_THRESHOLD}. Biochar is not eligible.",
            parameter="h_corg_ratio",
            value=h_corg_ratio,
            valid_range=f"[0, {H_C_ORG_THRESHOLD}]",
        )
    if h_corg_ratio < 0:
        raise DomainError(
            "H/C_org ratio cannot be negative",
            parameter="h_corg_ratio",
            value=h_corg_ratio,
            valid_range=f"[0, {H_C_ORG_THRESHOLD}]",
        )
    return h_corg_ratio


def calculate_persistence_fraction(h_corg_ratio: float, mean_soil_temp_c: float) -> PersistenceResult:
    """
    Calculate the BC+200 persistence fraction (Equation 6.4).

    Args:
        h_corg_ratio: H/C_org molar ratio (0 to 0.7)
        mean_soil_temp_c: Mean annual soil temperature (°C)

    Returns:
        PersistenceResult with PF (%) and the table row used

    Raises:
        DomainError: If the ratio is negative or above 0.7
    """
    h_corg_ratio = _check_ratio(h_corg_ratio)
    coefficients, temperature_used, clamped = get_persistence_coefficients(mean_soil_temp_c)

    raw_fraction = coefficients.m - coefficients.a * h_corg_ratio
    persistence_fraction = max(0.0, min(100.0, raw_fraction))

    logger.debug(
        "PF = %.2f - %.2f × %.4f = %.4f%% (T=%d°C)",
        coefficients.m, coefficients.a, h_corg_ratio, persistence_fraction, temperature_used,
    )

    return PersistenceResult(
        persistence_fraction_percent=persistence_fraction,
        h_corg_ratio=h_corg_ratio,
        mean_soil_temp_c=float(mean_soil_temp_c),
        temperature_used_c=temperature_used,
        temperature_clamped=clamped,
        m=coefficients.m,
        a=coefficients.a,
    )


def _check_loss_inputs(c_stored_tco2e: float, persistence_fraction_percent: float):
    c_stored_tco2e = require_non_negative(
        "c_stored_tco2e", c_stored_tco2e, "C_stored cannot be negative",
    )
    persistence_fraction_percent = require_between(
        "persistence_fraction_percent", persistence_fraction_percent, 0.0, 100.0,
        "Persistence fraction must be between 0 and 100",
    )
    return c_stored_tco2e, persistence_fraction_percent


def calculate_c_loss(c_stored_tco2e: float, persistence_fraction_percent: float) -> float:
    """
    Carbon expected to decompose within 200 years (Equation 6.3).

    Returns:
        C_loss in tCO2e

    Raises:
        DomainError: If C_stored < 0 or PF outside [0, 100]
    """
    c_stored_tco2e, persistence_fraction_percent = _check_loss_inputs(
        c_stored_tco2e, persistence_fraction_percent,
    )
    return c_stored_tco2e * (100 - persistence_fraction_percent) / 100


def calculate_permanent_carbon(c_stored_tco2e: float, persistence_fraction_percent: float) -> float:
    """Carbon remaining after 200 years (reporting only)."""
    c_stored_tco2e, persistence_fraction_percent = _check_loss_inputs(
        c_stored_tco2e, persistence_fraction_percent,
    )
    return c_stored_tco2e * persistence_fraction_percent / 100


# =============================================================================
# REPORTING HELPERS
# =============================================================================

def persistence_breakdown(
    h_corg_ratio: float,
    mean_soil_temp_c: float,
    c_stored_tco2e: float,
) -> PersistenceBreakdown:
    """Equations 6.3 and 6.4 with every intermediate value exposed."""
    result = calculate_persistence_fraction(h_corg_ratio, mean_soil_temp_c)
    pf = result.persistence_fraction_percent

    return PersistenceBreakdown(
        h_corg_ratio=result.h_corg_ratio,
        mean_soil_temp_c=result.mean_soil_temp_c,
        temperature_used_c=result.temperature_used_c,
        temperature_clamped=result.temperature_clamped,
        m=result.m,
        a=result.a,
        persistence_fraction_percent=pf,
        loss_percent=100 - pf,
        c_stored_tco2e=float(c_stored_tco2e),
        c_loss_tco2e=calculate_c_loss(c_stored_tco2e, pf),
        permanent_carbon_tco2e=calculate_permanent_carbon(c_stored_tco2e, pf),
    )


def estimate_persistence_range(
    mean_soil_temp_c: float,
    h_corg_ratios: Iterable[float] = DEFAULT_SENSITIVITY_RATIOS,
) -> List[Tuple[float, float]]:
    """
    PF for a set of ratios at one temperature, for sensitivity tables.

    Returns:
        List of (h_corg_ratio, persistence_fraction_percent) pairs
    """
    return [
        (ratio, calculate_persistence_fraction(ratio, mean_soil_temp_c).persistence_fraction_percent)
        for ratio in h_corg_ratios
    ]
