# -*- coding: utf-8 -*-
"""
Puro.earth Biochar Methodology Constants (Edition 2025 V1)

Reference data for the CORC quantification engine:
- BC+200 persistence regression coefficients (Table 6.1)
- Global Warming Potentials (IPCC AR5, 100-year)
- iLUC emission factors (Table 8.3)
- Puro biomass categories (Section 3.4.5)
- Quality threshold and physical conversion factors

Everything in this module is immutable published data. None of it is
configurable at runtime; revisions ship as a new CALCULATION_VERSION.
"""

from types import MappingProxyType
from typing import Mapping, NamedTuple, Tuple


# =============================================================================
# VERSIONING
# =============================================================================

# Embedded in every result so historical calculations stay reproducible
CALCULATION_VERSION = "puro-biochar-2025-v1.0.0"
METHODOLOGY_EDITION = "Puro.earth Biochar Methodology Edition 2025 V1"


# =============================================================================
# PHYSICAL CONSTANTS
# =============================================================================

# CO2/C molar mass ratio
CO2_TO_C_RATIO = 44 / 12

# Mass ratio → molar ratio for H/C_org (atomic mass C = 12, H = 1)
H_C_MOLAR_FACTOR = 12.0

KG_PER_TONNE = 1000.0
MJ_PER_GJ = 1000.0


# =============================================================================
# QUALITY
# =============================================================================

# Section 3.5: H/C_org must be <= 0.7 for CORC eligibility
H_C_ORG_THRESHOLD = 0.7

# Upper bounds of the informational quality tiers
QUALITY_TIER_BOUNDS: Tuple[Tuple[float, str], ...] = (
    (0.4, "excellent"),
    (0.5, "very_good"),
    (0.6, "good"),
    (0.7, "acceptable"),
)


# =============================================================================
# BC+200 PERSISTENCE MODEL (Table 6.1)
# =============================================================================

class PersistenceCoefficients(NamedTuple):
    """Regression coefficients for Equation 6.4: PF = M - a × H/C_org."""
    m: float
    a: float


SOIL_TEMP_MIN_C = 7
SOIL_TEMP_MAX_C = 40

PERSISTENCE_TABLE: Mapping[int, PersistenceCoefficients] = MappingProxyType({
    7: PersistenceCoefficients(96.59, 11.28),
    8: PersistenceCoefficients(95.98, 13.44),
    9: PersistenceCoefficients(95.28, 15.78),
    10: PersistenceCoefficients(94.49, 18.28),
    11: PersistenceCoefficients(93.60, 20.93),
    12: PersistenceCoefficients(92.62, 23.70),
    13: PersistenceCoefficients(91.54, 26.58),
    14: PersistenceCoefficients(90.37, 29.54),
    15: PersistenceCoefficients(89.10, 32.56),
    16: PersistenceCoefficients(87.75, 35.60),
    17: PersistenceCoefficients(86.31, 38.64),
    18: PersistenceCoefficients(86.19, 38.86),
    19: PersistenceCoefficients(86.19, 39.70),
    20: PersistenceCoefficients(86.19, 40.53),
    21: PersistenceCoefficients(86.19, 41.37),
    22: PersistenceCoefficients(86.19, 42.20),
    23: PersistenceCoefficients(86.19, 43.04),
    24: PersistenceCoefficients(86.19, 43.88),
    25: PersistenceCoefficients(86.19, 44.71),
    26: PersistenceCoefficients(86.19, 45.55),
    27: PersistenceCoefficients(86.19, 46.38),
    28: PersistenceCoefficients(86.19, 47.22),
    29: PersistenceCoefficients(86.19, 48.05),
    30: PersistenceCoefficients(86.19, 48.25),
    31: PersistenceCoefficients(86.19, 48.25),
    32: PersistenceCoefficients(86.19, 48.25),
    33: PersistenceCoefficients(86.19, 48.25),
    34: PersistenceCoefficients(86.19, 48.25),
    35: PersistenceCoefficients(86.19, 48.25),
    36: PersistenceCoefficients(86.19, 48.25),
    37: PersistenceCoefficients(86.19, 48.25),
    38: PersistenceCoefficients(86.19, 48.25),
    39: PersistenceCoefficients(86.19, 48.25),
    40: PersistenceCoefficients(86.19, 48.25),
})

DEFAULT_SENSITIVITY_RATIOS: Tuple[float, ...] = (0.3, 0.4, 0.5, 0.6, 0.7)


# =============================================================================
# GLOBAL WARMING POTENTIALS (IPCC AR5, 100-year)
# =============================================================================

GWP_AR5_100YR: Mapping[str, int] = MappingProxyType({
    "CO2": 1,
    "CH4": 28,
    "N2O": 265,
})


# =============================================================================
# LEAKAGE
# =============================================================================

# Table 8.3: kg CO2e per MJ of feedstock (dry LHV basis)
ILUC_FACTORS: Mapping[str, float] = MappingProxyType({
    "cereals_starch": 0.012,
    "sugar_crops": 0.013,
    "oil_crops": 0.055,
})

# Section 8.6: categories that always require iLUC quantification
HIGH_ILUC_RISK_CATEGORIES = frozenset({"A", "B", "N"})

# Section 8.2.3.d: plantation feedstocks treated as high iLUC risk
HIGH_ILUC_RISK_FEEDSTOCKS = frozenset({"palm", "soybean"})

# Waste and residue streams with no competing land use
WASTE_RESIDUE_CATEGORIES = frozenset({"C", "D", "E", "F", "G", "H", "I", "J", "K", "L"})


# =============================================================================
# PURO BIOMASS CATEGORIES (Section 3.4.5)
# =============================================================================

BIOMASS_CATEGORIES: Mapping[str, str] = MappingProxyType({
    "A": "Straw, stover, husks, shells, cobs, and similar agricultural production residues",
    "B": "Garden and park waste (excluding food waste)",
    "C": "Forestry residues (harvesting residues, dead wood, and other non-commercial wood)",
    "D": "Wood processing industry streams (sawdust, bark, chips)",
    "E": "Post-consumer wood (construction, demolition, furniture)",
    "F": "Food and beverage processing residues (excluding animal fats)",
    "G": "Food processing fats and oils (used cooking oil, animal fats)",
    "H": "Animal manure and slurry",
    "I": "Human waste (biosolids from composting toilets)",
    "J": "Sewage sludge",
    "K": "Paper industry sludge and black liquor",
    "L": "Other industrial and commercial organic streams",
    "M": "Invasive species and nuisance vegetation",
    "N": "Landscape management residues (fire prevention, roadside clearing)",
    "O": "Cultivated or harvested water-based plants or algae",
})


# =============================================================================
# NON-NORMATIVE ESTIMATION
# =============================================================================

# Conservative end of the typical 15-20% emissions-to-C_stored range
ESTIMATE_EMISSIONS_FRACTION = 0.20
