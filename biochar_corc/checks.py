# -*- coding: utf-8 -*-
"""Argument guards shared by the strict calculation functions."""

import math
from typing import Optional

from biochar_corc.exceptions import DomainError


def require_finite(name: str, value: float) -> float:
    """Reject NaN and infinities, which slip through ordinary range checks."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise DomainError(
            f"{name} must be a number, got {type(value).__name__}",
            parameter=name,
            value=value,
        )
    if not math.isfinite(value):
        raise DomainError(
            f"{name} must be a finite number",
            parameter=name,
            value=value,
        )
    return float(value)


def require_non_negative(name: str, value: float, message: Optional[str] = None) -> float:
    value = require_finite(name, value)
    if value < 0:
        raise DomainError(
            message or f"{name} cannot be negative",
            parameter=name,
            value=value,
            valid_range=">= 0",
        )
    return value


def require_between(
    name: str,
    value: float,
    low: float,
    high: float,
    message: Optional[str] = None,
) -> float:
    """Closed-interval check: low <= value <= high."""
    value = require_finite(name, value)
    if value < low or value > high:
        raise DomainError(
            message or f"{name} must be between {low:g} and {high:g}",
            parameter=name,
            value=value,
            valid_range=f"[{low:g}, {high:g}]",
        )
    return value
