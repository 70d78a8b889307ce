# -*- coding: utf-8 -*-
"""
CORC Calculation Provenance

SHA-256 provenance for the quantification pipeline:
- Ordered formula steps (the audit trail shown next to a result)
- Deterministic calculation IDs derived from the inputs
- Provenance hash over inputs, steps, outputs and methodology version
- Integrity verification of stored records

No wall-clock data enters a hash or an ID, so the same inputs always give
the same record. Callers that need "when" store it alongside the snapshot.
"""

from __future__ import annotations

import hashlib
import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple


def _json_default(obj: Any) -> Any:
    if isinstance(obj, Enum):
        return obj.value
    if hasattr(obj, "to_dict"):
        return obj.to_dict()
    if hasattr(obj, "model_dump"):
        return obj.model_dump(mode="json")
    raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")


def canonical_json(data: Any) -> str:
    """Sorted-key, compact JSON used for every hash in this package."""
    return json.dumps(
        data,
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=True,
        default=_json_default,
    )


def compute_provenance_hash(data: Any) -> str:
    """64-character SHA-256 hex digest of canonical_json(data)."""
    return hashlib.sha256(canonical_json(data).encode("utf-8")).hexdigest()


@dataclass(frozen=True)
class FormulaStep:
    """
    One step of the calculation trail.

    Attributes:
        step_number: Sequential step identifier
        description: Human-readable description
        formula: Formula applied, as text
        output_name: Name of the value produced
        value: Value produced
        unit: Unit of the value
        inputs: Values the step consumed
    """
    step_number: int
    description: str
    formula: str
    output_name: str
    value: float
    unit: str
    inputs: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "step_number": self.step_number,
            "description": self.description,
            "formula": self.formula,
            "output_name": self.output_name,
            "value": self.value,
            "unit": self.unit,
            "inputs": dict(self.inputs),
        }


@dataclass(frozen=True)
class CalculationProvenance:
    """
    Complete provenance record for one calculation.

    The hash covers the formula identity, inputs, steps and outputs.
    """
    calculation_id: str
    formula_id: str
    formula_version: str
    inputs: Dict[str, Any]
    steps: Tuple[FormulaStep, ...]
    outputs: Dict[str, Any]
    provenance_hash: str = ""

    def hash_payload(self) -> Dict[str, Any]:
        return {
            "calculation_id": self.calculation_id,
            "formula_id": self.formula_id,
            "formula_version": self.formula_version,
            "inputs": self.inputs,
            "steps": [step.to_dict() for step in self.steps],
            "outputs": self.outputs,
        }

    def verify_integrity(self) -> bool:
        """Recalculate the hash and compare with the stored one."""
        return compute_provenance_hash(self.hash_payload()) == self.provenance_hash

    def to_audit_record(self) -> Dict[str, Any]:
        record = self.hash_payload()
        record["provenance_hash"] = self.provenance_hash
        record["integrity_verified"] = self.verify_integrity()
        return record


class ProvenanceTracker:
    """
    Collects formula steps for a single calculation.

    One tracker per calculation; trackers are cheap and never shared
    between threads.

    Example:
        >>> tracker = ProvenanceTracker("corc_net", "puro-biochar-2025-v1.0.0")
        >>> tracker.start({"dry_mass_tonnes": 10.0})
        >>> tracker.add_step(
        ...     description="Calculate C_stored",
        ...     formula="C_stored = Q × C_org × 44/12",
        ...     output_name="c_stored_tco2e",
        ...     value=29.33,
        ...     unit="tCO2e",
        ... )
        >>> record = tracker.complete({"net_corcs_tco2e": 21.84})
        >>> assert record.verify_integrity()
    """

    def __init__(self, formula_id: str, formula_version: str):
        self.formula_id = formula_id
        self.formula_version = formula_version
        self._inputs: Optional[Dict[str, Any]] = None
        self._steps: List[FormulaStep] = []

    @property
    def steps(self) -> Tuple[FormulaStep, ...]:
        return tuple(self._steps)

    def start(self, inputs: Dict[str, Any]) -> str:
        """
        Begin tracking and return the deterministic calculation ID.

        Raises:
            RuntimeError: If a calculation is already in progress
        """
        if self._inputs is not None:
            raise RuntimeError(
                "Calculation already in progress. Complete the current calculation first."
            )
        self._inputs = dict(inputs)
        self._steps = []
        return self.calculation_id

    @property
    def calculation_id(self) -> str:
        if self._inputs is None:
            raise RuntimeError("No calculation in progress. Call start() first.")
        return compute_provenance_hash({
            "formula_id": self.formula_id,
            "formula_version": self.formula_version,
            "inputs": self._inputs,
        })[:16]

    def add_step(
        self,
        description: str,
        formula: str,
        output_name: str,
        value: float,
        unit: str,
        inputs: Optional[Dict[str, Any]] = None,
    ) -> FormulaStep:
        """
        Append a step to the trail.

        Raises:
            RuntimeError: If no calculation is in progress
        """
        if self._inputs is None:
            raise RuntimeError("No calculation in progress. Call start() first.")

        step = FormulaStep(
            step_number=len(self._steps) + 1,
            description=description,
            formula=formula,
            output_name=output_name,
            value=value,
            unit=unit,
            inputs=dict(inputs or {}),
        )
        self._steps.append(step)
        return step

    def complete(self, outputs: Dict[str, Any]) -> CalculationProvenance:
        """
        Finish the calculation and produce its hashed record.

        Raises:
            RuntimeError: If no calculation is in progress
        """
        calculation_id = self.calculation_id
        record = CalculationProvenance(
            calculation_id=calculation_id,
            formula_id=self.formula_id,
            formula_version=self.formula_version,
            inputs=self._inputs,
            steps=tuple(self._steps),
            outputs=dict(outputs),
        )
        sealed = CalculationProvenance(
            calculation_id=record.calculation_id,
            formula_id=record.formula_id,
            formula_version=record.formula_version,
            inputs=record.inputs,
            steps=record.steps,
            outputs=record.outputs,
            provenance_hash=compute_provenance_hash(record.hash_payload()),
        )
        self._inputs = None
        self._steps = []
        return sealed


def verify_calculation_reproducibility(
    provenance1: CalculationProvenance,
    provenance2: CalculationProvenance,
) -> bool:
    """True when two records describe bit-identical calculations."""
    return (
        provenance1.provenance_hash == provenance2.provenance_hash
        and provenance1.verify_integrity()
        and provenance2.verify_integrity()
    )
