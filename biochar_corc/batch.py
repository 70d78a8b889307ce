# -*- coding: utf-8 -*-
"""
Batch CORC Calculator

Runs many independent monitoring-period calculations at once.

Features:
- Parallel processing (thread pool)
- Progress tracking
- Error isolation (one failure doesn't stop the batch)
- Results returned in input order
- Net CORC totals over successful items
"""

import logging
import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Sequence

from biochar_corc.calculator import CORCCalculator, CORCResult
from biochar_corc.exceptions import CORCError, format_exception_chain
from biochar_corc.models import CORCInput

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BatchItem:
    """
    Outcome of one item in a batch.

    Exactly one of result / error is set.
    """
    index: int
    result: Optional[CORCResult] = None
    error: Optional[str] = None
    error_code: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return self.result is not None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "index": self.index,
            "result": self.result.to_dict() if self.result else None,
            "error": self.error,
            "error_code": self.error_code,
        }


@dataclass
class BatchResult:
    """
    Result of a batch calculation.

    Attributes:
        items: Per-input outcomes, in input order
        total_net_corcs_tco2e: Sum of net CORCs over successful items
        successful_count: Number of successful calculations
        failed_count: Number of failed calculations
        warning_count: Number of successful calculations with warnings
        batch_duration_seconds: Wall-clock processing time
    """
    items: List[BatchItem]
    total_net_corcs_tco2e: float = 0.0
    successful_count: int = 0
    failed_count: int = 0
    warning_count: int = 0
    batch_duration_seconds: float = 0.0

    def __post_init__(self):
        """Calculate summary statistics"""
        results = [item.result for item in self.items if item.result is not None]
        self.total_net_corcs_tco2e = sum(r.net_corcs_tco2e for r in results)
        self.successful_count = len(results)
        self.failed_count = len(self.items) - len(results)
        self.warning_count = len([r for r in results if r.warnings])

    @property
    def results(self) -> List[Optional[CORCResult]]:
        """Results in input order; None where the item failed."""
        return [item.result for item in self.items]

    def get_failed(self) -> List[BatchItem]:
        return [item for item in self.items if not item.succeeded]

    def get_errors(self) -> List[str]:
        return [item.error for item in self.items if item.error]

    def get_warnings(self) -> List[str]:
        warnings = []
        for item in self.items:
            if item.result is not None:
                warnings.extend(item.result.warnings)
        return warnings

    def to_dict(self) -> Dict[str, Any]:
        """Summary only; per-item results are available via items."""
        return {
            "total_calculations": len(self.items),
            "total_net_corcs_tco2e": self.total_net_corcs_tco2e,
            "successful_count": self.successful_count,
            "failed_count": self.failed_count,
            "warning_count": self.warning_count,
            "batch_duration_seconds": self.batch_duration_seconds,
        }


class BatchCalculator:
    """
    Parallel batch calculator.

    Each item is an independent pure calculation, so items can run in any
    order on any worker; the result list is re-assembled in input order.
    """

    def __init__(
        self,
        calculator: Optional[CORCCalculator] = None,
        max_workers: Optional[int] = None,
    ):
        """
        Initialize batch calculator.

        Args:
            calculator: Core calculator (auto-creates if None)
            max_workers: Max parallel workers (defaults to config.batch_max_workers)
        """
        self.calculator = calculator or CORCCalculator()
        self.max_workers = max_workers or self.calculator.config.batch_max_workers

    def calculate_batch(
        self,
        inputs: Sequence[CORCInput],
        progress_callback: Optional[Callable[[int, int], None]] = None,
        continue_on_error: bool = True,
    ) -> BatchResult:
        """
        Calculate CORCs for a batch of inputs.

        Args:
            inputs: CORCInputs to calculate
            progress_callback: Optional callback function(completed, total)
            continue_on_error: Record CORCError failures instead of raising

        Returns:
            BatchResult with per-item outcomes and totals

        Raises:
            CORCError: From the first failing item when continue_on_error is False
        """
        start = time.perf_counter()
        total = len(inputs)
        items: List[Optional[BatchItem]] = [None] * total
        completed = 0

        logger.info("Starting batch CORC calculation: %d inputs", total)

        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            future_to_index = {
                executor.submit(self._safe_calculate, index, item, continue_on_error): index
                for index, item in enumerate(inputs)
            }

            for future in as_completed(future_to_index):
                index = future_to_index[future]
                items[index] = future.result()
                completed += 1

                if progress_callback:
                    progress_callback(completed, total)

        duration = time.perf_counter() - start
        batch_result = BatchResult(items=items, batch_duration_seconds=duration)

        logger.info(
            "Batch CORC calculation completed: %d succeeded, %d failed, "
            "%.3f tCO2e net in %.2fs",
            batch_result.successful_count,
            batch_result.failed_count,
            batch_result.total_net_corcs_tco2e,
            duration,
        )
        return batch_result

    def _safe_calculate(
        self,
        index: int,
        inputs: CORCInput,
        continue_on_error: bool,
    ) -> BatchItem:
        try:
            return BatchItem(index=index, result=self.calculator.calculate(inputs))
        except CORCError as e:
            logger.error("CORC calculation failed for item %d: %s", index, e)

            if not continue_on_error:
                raise

            return BatchItem(
                index=index,
                error=format_exception_chain(e),
                error_code=e.error_code,
            )
