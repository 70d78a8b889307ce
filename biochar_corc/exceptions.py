# -*- coding: utf-8 -*-
"""Biochar CORC Exception Hierarchy.

Exception Hierarchy:
    CORCError (base)
    ├── DomainError         - strict arithmetic argument outside its physical range
    └── ConfigurationError  - invalid engine configuration

All exceptions carry rich context:
- error_code: Unique error identifier (e.g. "CORC_DOMAIN_ERROR")
- context: Dictionary with error-specific details
- timestamp: When the error occurred

DomainError also subclasses ValueError so callers that only know the
standard library contract can still catch it.

Example:
    >>> from biochar_corc.exceptions import DomainError
    >>> raise DomainError(
    ...     message="Organic carbon percent must be greater than 0",
    ...     parameter="organic_carbon_percent",
    ...     value=0.0,
    ...     valid_range="(0, 100]",
    ... )
"""

import json
import re
from datetime import datetime
from typing import Any, Dict, Optional


class CORCError(Exception):
    """Base exception for all CORC engine errors.

    Attributes:
        message: Human-readable error message
        error_code: Unique error identifier
        context: Dictionary with error-specific details
        timestamp: When the error occurred
    """

    ERROR_PREFIX = "CORC"

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        """Initialize exception with rich context.

        Args:
            message: Human-readable error message
            error_code: Unique error identifier (auto-generated if not provided)
            context: Dictionary with error-specific details
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self._generate_error_code()
        self.context = context or {}
        self.timestamp = datetime.now()

    def _generate_error_code(self) -> str:
        """Generate error code from the class name, e.g. CORC_DOMAIN_ERROR."""
        class_name = self.__class__.__name__
        if class_name.startswith(self.ERROR_PREFIX):
            class_name = class_name[len(self.ERROR_PREFIX):] or "Error"
        error_type = re.sub(r'(?<!^)(?=[A-Z])', '_', class_name).upper()
        return f"{self.ERROR_PREFIX}_{error_type}"

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for serialization."""
        return {
            "error_type": self.__class__.__name__,
            "error_code": self.error_code,
            "message": self.message,
            "context": self.context,
            "timestamp": self.timestamp.isoformat(),
        }

    def to_json(self) -> str:
        """Convert exception to JSON string."""
        return json.dumps(self.to_dict(), indent=2, default=str)

    def __str__(self) -> str:
        return f"[{self.error_code}] - {self.message}"

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message='{self.message}', "
            f"error_code='{self.error_code}')"
        )


class DomainError(CORCError, ValueError):
    """A strict calculation received an argument outside its valid range.

    These are data-integrity errors (negative mass, percentage outside
    [0, 100], ineligible H/C_org passed to the persistence model) and are
    never coerced silently.

    Example:
        >>> raise DomainError(
        ...     message="Attribution factor must be between 0 and 1",
        ...     parameter="attribution_factor",
        ...     value=1.5,
        ...     valid_range="[0, 1]",
        ... )
    """

    def __init__(
        self,
        message: str,
        parameter: Optional[str] = None,
        value: Any = None,
        valid_range: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        """Initialize domain error.

        Args:
            message: Error message
            parameter: Name of the offending argument
            value: Value that was rejected
            valid_range: Human-readable valid range
            context: Additional error context
        """
        context = dict(context or {})
        if parameter is not None:
            context["parameter"] = parameter
            context["value"] = value
        if valid_range is not None:
            context["valid_range"] = valid_range
        super().__init__(message, context=context)
        self.parameter = parameter
        self.value = value


class ConfigurationError(CORCError):
    """Engine configuration is invalid.

    Example:
        >>> raise ConfigurationError(
        ...     message="batch_max_workers must be >= 1",
        ...     context={"batch_max_workers": 0},
        ... )
    """


def format_exception_chain(exc: BaseException) -> str:
    """Format exception chain for logging/display.

    Args:
        exc: Exception to format

    Returns:
        Formatted string with the full exception chain
    """
    lines = []
    current: Optional[BaseException] = exc

    while current is not None:
        if isinstance(current, CORCError):
            lines.append(str(current))
            if current.context:
                lines.append(f"  Context: {current.context}")
        else:
            lines.append(f"{type(current).__name__}: {current}")
        current = current.__cause__

    return "\n".join(lines)


__all__ = [
    "CORCError",
    "DomainError",
    "ConfigurationError",
    "format_exception_chain",
]
