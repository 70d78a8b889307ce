# -*- coding: utf-8 -*-
"""
Lenient input validation.

validate_input() inspects a CORCInput and reports every problem it finds
instead of stopping at the first one. It never raises: errors mark the
input as unusable for issuance, warnings flag values the calculation will
adjust (clamped temperatures, defaulted allocation factors, missing
baselines).
"""

import logging
import math
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from biochar_corc.config import CORCConfig, get_config
from biochar_corc.constants import H_C_ORG_THRESHOLD, SOIL_TEMP_MAX_C, SOIL_TEMP_MIN_C
from biochar_corc.exceptions import DomainError
from biochar_corc.models import BaselineType, CORCInput
from biochar_corc.quality import calculate_h_corg_ratio

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ValidationReport:
    """Outcome of validate_input()."""
    is_valid: bool
    errors: Tuple[str, ...] = field(default_factory=tuple)
    warnings: Tuple[str, ...] = field(default_factory=tuple)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "is_valid": self.is_valid,
            "errors": list(self.errors),
            "warnings": list(self.warnings),
        }


def _finite(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and math.isfinite(value)


def validate_input(inputs: CORCInput, config: Optional[CORCConfig] = None) -> ValidationReport:
    """
    Check a CORCInput for calculation readiness.

    Args:
        inputs: Input to check
        config: Engine configuration (defaults to get_config())

    Returns:
        ValidationReport; is_valid is False when any error was found
    """
    config = config or get_config()
    errors: List[str] = []
    warnings: List[str] = []

    composition = inputs.composition
    mass = composition.dry_mass_tonnes
    organic = composition.organic_carbon_percent
    hydrogen = composition.hydrogen_percent

    # Composition
    if not _finite(mass) or mass <= 0:
        errors.append("Biochar dry mass must be greater than 0")

    organic_ok = _finite(organic) and 0 < organic <= 100
    if not organic_ok:
        errors.append("Organic carbon must be between 0 and 100%")

    hydrogen_ok = _finite(hydrogen) and 0 <= hydrogen <= 100
    if not hydrogen_ok:
        errors.append("Hydrogen must be between 0 and 100%")

    # Quality
    ratio: Optional[float] = None
    if organic_ok and hydrogen_ok:
        try:
            ratio = calculate_h_corg_ratio(hydrogen, organic)
        except DomainError as exc:
            logger.debug("H/C_org ratio not computable: %s", exc)

    if ratio is None:
        errors.append("Unable to calculate H/C_org ratio")
    elif ratio > H_C_ORG_THRESHOLD:
        errors.append(
            f"H/C_org ratio ({ratio:.3f}) exceeds threshold of {H_C_ORG_THRESHOLD}"
        )
    elif ratio > config.near_threshold_warning_ratio:
        warnings.append(
            f"H/C_org ratio ({ratio:.3f}) is close to threshold - consider quality improvement"
        )

    # Soil temperature
    category = inputs.end_use.category
    if not category.requires_soil_temperature:
        warnings.append(
            f"End use {category.value} is not a soil application - "
            f"soil temperature is still applied to the persistence table"
        )
    temperature = inputs.end_use.mean_soil_temp_c
    if not _finite(temperature):
        errors.append("Soil temperature must be a finite number")
    elif temperature < SOIL_TEMP_MIN_C:
        warnings.append(
            f"Soil temperature below {SOIL_TEMP_MIN_C}°C - will use {SOIL_TEMP_MIN_C}°C coefficients"
        )
    elif temperature > SOIL_TEMP_MAX_C:
        warnings.append(
            f"Soil temperature above {SOIL_TEMP_MAX_C}°C - will use {SOIL_TEMP_MAX_C}°C coefficients"
        )

    # Baseline
    baseline = inputs.baseline
    if baseline.baseline_type is BaselineType.CHARCOAL_REPURPOSE:
        storage = baseline.baseline_carbon_storage_tco2e
        if storage is None or storage <= 0:
            warnings.append(
                "Charcoal repurpose baseline requires baseline carbon storage value"
            )

    # Allocation
    factor = inputs.project_emissions.co_product_allocation_factor
    if factor is None:
        warnings.append("Co-product allocation factor not set - defaulting to 1.0")
    elif not _finite(factor) or factor <= 0 or factor > 1:
        warnings.append(
            f"Co-product allocation factor {factor} outside (0, 1] - defaulting to 1.0"
        )

    report = ValidationReport(
        is_valid=not errors,
        errors=tuple(errors),
        warnings=tuple(warnings),
    )
    logger.debug(
        "Input validation: valid=%s errors=%d warnings=%d",
        report.is_valid, len(errors), len(warnings),
    )
    return report
