# -*- coding: utf-8 -*-
"""
CORC issuance helpers.

- Serial numbers of the form ``CORC-<FACILITY>-<YEAR>-<000001>``
- CORCSnapshot: the persisted figures of a calculation, with a consistency
  check that the stored net equals Equation 5.1 (floored at 0) within
  0.001 tCO2e

The draft / issued / retired lifecycle belongs to the registry and is not
modelled here.
"""

from __future__ import annotations

import re
from typing import Optional

from pydantic import BaseModel, Field, model_validator

from biochar_corc.constants import CALCULATION_VERSION
from biochar_corc.exceptions import DomainError
from biochar_corc.models import PermanenceType

NET_TOLERANCE_TCO2E = 0.001
MAX_SERIAL_SEQUENCE = 999_999

_FACILITY_CODE = re.compile(r"^[A-Z0-9]+$")


def generate_serial_number(facility_code: str, year: int, sequence: int) -> str:
    """
    Build a CORC serial number.

    Args:
        facility_code: Alphanumeric facility code (upper-cased)
        year: Four-digit issuance year
        sequence: Per-facility, per-year sequence, 1 to 999999

    Raises:
        DomainError: If any argument is malformed

    Example:
        >>> generate_serial_number("fin01", 2025, 42)
        'CORC-FIN01-2025-000042'
    """
    code = facility_code.strip().upper() if isinstance(facility_code, str) else ""
    if not _FACILITY_CODE.match(code):
        raise DomainError(
            "Facility code must be a non-empty alphanumeric string",
            parameter="facility_code",
            value=facility_code,
        )
    if isinstance(year, bool) or not isinstance(year, int) or not 1000 <= year <= 9999:
        raise DomainError(
            "Year must be a four-digit integer",
            parameter="year",
            value=year,
            valid_range="[1000, 9999]",
        )
    if isinstance(sequence, bool) or not isinstance(sequence, int) or not 1 <= sequence <= MAX_SERIAL_SEQUENCE:
        raise DomainError(
            f"Sequence must be an integer between 1 and {MAX_SERIAL_SEQUENCE}",
            parameter="sequence",
            value=sequence,
            valid_range=f"[1, {MAX_SERIAL_SEQUENCE}]",
        )
    return f"CORC-{code}-{year}-{sequence:06d}"


class CORCSnapshot(BaseModel):
    """Persisted figures of one CORC calculation."""

    serial_number: Optional[str] = Field(None, min_length=1)
    c_stored_tco2e: float = Field(..., ge=0)
    c_baseline_tco2e: float = Field(default=0.0, ge=0)
    c_loss_tco2e: float = Field(..., ge=0)
    persistence_fraction_percent: float = Field(..., ge=0, le=100)
    e_project_tco2e: float = Field(..., ge=0)
    e_leakage_tco2e: float = Field(default=0.0, ge=0)
    net_corcs_tco2e: float
    permanence_type: PermanenceType = PermanenceType.BC200
    calculation_version: str = CALCULATION_VERSION
    provenance_hash: Optional[str] = None

    model_config = {"extra": "forbid", "frozen": True}

    @property
    def formula_net_tco2e(self) -> float:
        """Equation 5.1 over the stored terms, before the floor at 0."""
        return (
            self.c_stored_tco2e
            - self.c_baseline_tco2e
            - self.c_loss_tco2e
            - self.e_project_tco2e
            - self.e_leakage_tco2e
        )

    @model_validator(mode="after")
    def check_net_matches_formula(self) -> CORCSnapshot:
        """Net must be non-negative and equal the floored formula value."""
        if self.net_corcs_tco2e < 0:
            raise ValueError(
                "Net CORCs cannot be negative. The value should be clamped to 0 "
                "when emissions exceed storage."
            )
        expected = self.formula_net_tco2e
        expected_clamped = max(0.0, expected)
        if abs(expected_clamped - self.net_corcs_tco2e) > NET_TOLERANCE_TCO2E:
            raise ValueError(
                f"Net CORCs ({self.net_corcs_tco2e}) doesn't match expected value "
                f"({expected_clamped:.3f}). Formula result: {expected:.3f}"
            )
        return self

    @classmethod
    def from_result(cls, result, serial_number: Optional[str] = None) -> CORCSnapshot:
        """Snapshot a CORCResult for storage."""
        return cls(
            serial_number=serial_number,
            c_stored_tco2e=result.c_stored_tco2e,
            c_baseline_tco2e=result.c_baseline_tco2e,
            c_loss_tco2e=result.c_loss_tco2e,
            persistence_fraction_percent=result.persistence_fraction_percent,
            e_project_tco2e=result.e_project_tco2e,
            e_leakage_tco2e=result.e_leakage_tco2e,
            net_corcs_tco2e=result.net_corcs_tco2e,
            permanence_type=result.permanence_type,
            calculation_version=result.calculation_version,
            provenance_hash=result.provenance_hash,
        )
