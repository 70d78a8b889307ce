# -*- coding: utf-8 -*-
"""
CORC Engine Configuration

Centralized configuration for the quantification engine covering:
- Near-threshold warning level used by input validation
- Whether results carry the step-by-step formula trail
- Batch fan-out worker count
- Permanence claim tagged on results

Methodology constants (44/12, GWPs, the 0.7 threshold, Table 6.1) are not
configuration and cannot be changed here.

All settings can be overridden via environment variables with the
``BIOCHAR_CORC_`` prefix (e.g. ``BIOCHAR_CORC_BATCH_MAX_WORKERS``), or
loaded from a YAML file.

Example:
    >>> from biochar_corc.config import get_config
    >>> cfg = get_config()
    >>> print(cfg.near_threshold_warning_ratio, cfg.batch_max_workers)
"""

from __future__ import annotations

import logging
import os
import threading
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from biochar_corc.constants import H_C_ORG_THRESHOLD
from biochar_corc.exceptions import ConfigurationError
from biochar_corc.models import PermanenceType

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Environment variable prefix
# ---------------------------------------------------------------------------

_ENV_PREFIX = "BIOCHAR_CORC_"


# ---------------------------------------------------------------------------
# CORCConfig
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class CORCConfig:
    """Complete configuration for the CORC quantification engine.

    Attributes:
        near_threshold_warning_ratio: H/C_org above which validation warns
            that the batch is close to the eligibility threshold.
        include_formula_steps: Whether results carry the formula trail.
        batch_max_workers: Thread pool size for batch calculations.
        permanence_type: Permanence claim tagged on results.
    """

    # -- Validation ----------------------------------------------------------
    near_threshold_warning_ratio: float = 0.6

    # -- Results -------------------------------------------------------------
    include_formula_steps: bool = True
    permanence_type: str = PermanenceType.BC200.value

    # -- Batch ---------------------------------------------------------------
    batch_max_workers: int = 4

    def validate(self) -> CORCConfig:
        """Check value ranges.

        Raises:
            ConfigurationError: If any value is out of range.
        """
        if not 0 < self.near_threshold_warning_ratio <= H_C_ORG_THRESHOLD:
            raise ConfigurationError(
                f"near_threshold_warning_ratio must be in (0, {H_C_ORG_THRESHOLD}]",
                context={"near_threshold_warning_ratio": self.near_threshold_warning_ratio},
            )
        if self.batch_max_workers < 1:
            raise ConfigurationError(
                "batch_max_workers must be >= 1",
                context={"batch_max_workers": self.batch_max_workers},
            )
        valid_permanence = {p.value for p in PermanenceType}
        if self.permanence_type not in valid_permanence:
            raise ConfigurationError(
                f"permanence_type must be one of {sorted(valid_permanence)}",
                context={"permanence_type": self.permanence_type},
            )
        return self

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    # ------------------------------------------------------------------
    # Factory helpers
    # ------------------------------------------------------------------

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> CORCConfig:
        """Build a config from a mapping, rejecting unknown keys."""
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ConfigurationError(
                f"Unknown configuration keys: {sorted(unknown)}",
                context={"unknown_keys": sorted(unknown)},
            )
        return cls(**data).validate()

    @classmethod
    def from_yaml(cls, path: Union[str, Path]) -> CORCConfig:
        """Load configuration from a YAML file.

        The file may hold the settings at top level or under a
        ``biochar_corc`` key.
        """
        path = Path(path)
        with open(path, encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}

        if not isinstance(raw, dict):
            raise ConfigurationError(
                f"Configuration file {path} must contain a mapping",
                context={"path": str(path)},
            )
        section = raw.get("biochar_corc", raw)

        config = cls.from_dict(section)
        logger.info("CORCConfig loaded from %s", path)
        return config

    @classmethod
    def from_env(cls) -> CORCConfig:
        """Build a CORCConfig from environment variables.

        Every field can be overridden via ``BIOCHAR_CORC_<FIELD_UPPER>``.
        Boolean values accept ``true/1/yes`` (case-insensitive).
        """
        prefix = _ENV_PREFIX

        def _env(name: str, default: Any = None) -> Optional[str]:
            return os.environ.get(f"{prefix}{name}", default)

        def _bool(name: str, default: bool) -> bool:
            val = _env(name)
            if val is None:
                return default
            return val.lower() in ("true", "1", "yes")

        def _int(name: str, default: int) -> int:
            val = _env(name)
            if val is None:
                return default
            try:
                return int(val)
            except ValueError:
                logger.warning(
                    "Invalid integer for %s%s=%s, using default %d",
                    prefix, name, val, default,
                )
                return default

        def _float(name: str, default: float) -> float:
            val = _env(name)
            if val is None:
                return default
            try:
                return float(val)
            except ValueError:
                logger.warning(
                    "Invalid float for %s%s=%s, using default %s",
                    prefix, name, val, default,
                )
                return default

        config = cls(
            near_threshold_warning_ratio=_float(
                "NEAR_THRESHOLD_WARNING_RATIO", cls.near_threshold_warning_ratio,
            ),
            include_formula_steps=_bool("INCLUDE_FORMULA_STEPS", cls.include_formula_steps),
            permanence_type=_env("PERMANENCE_TYPE", cls.permanence_type),
            batch_max_workers=_int("BATCH_MAX_WORKERS", cls.batch_max_workers),
        ).validate()

        logger.info(
            "CORCConfig loaded: near_threshold=%.2f, formula_steps=%s, "
            "permanence=%s, batch_workers=%d",
            config.near_threshold_warning_ratio,
            config.include_formula_steps,
            config.permanence_type,
            config.batch_max_workers,
        )
        return config


# ---------------------------------------------------------------------------
# Thread-safe singleton accessor
# ---------------------------------------------------------------------------

_config_instance: Optional[CORCConfig] = None
_config_lock = threading.Lock()


def get_config() -> CORCConfig:
    """Return the singleton CORCConfig, creating from env if needed."""
    global _config_instance
    if _config_instance is None:
        with _config_lock:
            if _config_instance is None:
                _config_instance = CORCConfig.from_env()
    return _config_instance


def set_config(config: CORCConfig) -> None:
    """Replace the singleton CORCConfig (useful for testing).

    Args:
        config: New configuration to install.
    """
    global _config_instance
    config.validate()
    with _config_lock:
        _config_instance = config
    logger.info("CORCConfig replaced programmatically")


def reset_config() -> None:
    """Reset the singleton (primarily for test teardown)."""
    global _config_instance
    with _config_lock:
        _config_instance = None


__all__ = [
    "CORCConfig",
    "get_config",
    "set_config",
    "reset_config",
]
