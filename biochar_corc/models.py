# -*- coding: utf-8 -*-
"""
CORC Engine Input Models

Pydantic v2 models for everything the surrounding application hands to the
quantification engine: lab composition, end-use context, baseline scenario,
project emissions and leakage. All models are frozen and reject unknown
fields, so they serialize cleanly to and from JSON for storage or transport.

Emission and leakage terms are kg CO2e (stack CH4/N2O are kg of gas) and
must be non-negative. Composition ranges are not enforced here; the strict
calculation functions and ``validate_input`` own those checks. When total
carbon is reported, organic carbon must equal total - inorganic.

Models:
    - Enums: EndUseCategory, EndUseGroup, BaselineType, PermanenceType
    - Composition: BiocharComposition
    - Context: EndUseContext, BaselineScenario
    - Project emissions: BiomassEmissions, ProductionEmissions,
      EmbodiedEmissions, EndUseEmissions, ProjectEmissionsInput
    - Leakage: EcologicalLeakage, MarketActivityLeakage, LeakageInput, ILUCInput
    - Aggregate: CORCInput
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, model_validator

from biochar_corc.quality import derive_organic_carbon


_FROZEN = {"extra": "forbid", "frozen": True}

CARBON_BALANCE_TOLERANCE = 1e-6  # percentage points


# =============================================================================
# Enumerations
# =============================================================================


class EndUseGroup(str, Enum):
    """Coarse end-use grouping."""
    SOIL = "soil"
    CONSTRUCTION = "construction"
    OTHER = "other"


class EndUseCategory(str, Enum):
    """End-use categories (Section 3.6)."""
    SOIL_AGRICULTURE = "soil_agriculture"
    SOIL_FORESTRY = "soil_forestry"
    SOIL_URBAN = "soil_urban"
    CONSTRUCTION_CONCRETE = "construction_concrete"
    CONSTRUCTION_ASPHALT = "construction_asphalt"
    CONSTRUCTION_BRICKS = "construction_bricks"
    OTHER = "other"

    @property
    def group(self) -> EndUseGroup:
        if self.value.startswith("soil_"):
            return EndUseGroup.SOIL
        if self.value.startswith("construction_"):
            return EndUseGroup.CONSTRUCTION
        return EndUseGroup.OTHER

    @property
    def requires_soil_temperature(self) -> bool:
        return self.group is EndUseGroup.SOIL


class BaselineType(str, Enum):
    """Baseline scenarios (Section 3.2)."""
    NEW_BUILT = "new_built"
    RETROFIT_FACILITY = "retrofit_facility"
    CHARCOAL_REPURPOSE = "charcoal_repurpose"


class PermanenceType(str, Enum):
    """Permanence claim attached to issued CORCs."""
    BC100 = "BC100+"
    BC200 = "BC200+"


# =============================================================================
# Composition and context
# =============================================================================


class BiocharComposition(BaseModel):
    """Lab composition of one production batch."""

    dry_mass_tonnes: float = Field(..., description="Dry biochar mass (tonnes)")
    organic_carbon_percent: Optional[float] = Field(
        None, description="Organic carbon content (% of dry mass)",
    )
    hydrogen_percent: float = Field(..., description="Hydrogen content (% of dry mass)")
    total_carbon_percent: Optional[float] = Field(
        None, description="Total carbon content (%), used to derive organic carbon",
    )
    inorganic_carbon_percent: float = Field(
        default=0.0, description="Inorganic (carbonate) carbon content (%)",
    )

    model_config = _FROZEN

    @model_validator(mode="before")
    @classmethod
    def derive_organic_carbon_from_total(cls, data):
        """Fill organic carbon from total - inorganic when only total is given."""
        if not isinstance(data, dict):
            return data
        if data.get("organic_carbon_percent") is None:
            total = data.get("total_carbon_percent")
            if total is None:
                raise ValueError(
                    "Either organic_carbon_percent or total_carbon_percent is required"
                )
            data = dict(data)
            data["organic_carbon_percent"] = derive_organic_carbon(
                float(total), float(data.get("inorganic_carbon_percent") or 0.0),
            )
        return data

    @model_validator(mode="after")
    def check_carbon_balance(self) -> BiocharComposition:
        """Organic carbon must equal total - inorganic when total is reported."""
        if self.total_carbon_percent is None or self.organic_carbon_percent is None:
            return self
        expected = derive_organic_carbon(
            self.total_carbon_percent, self.inorganic_carbon_percent,
        )
        if abs(self.organic_carbon_percent - expected) > CARBON_BALANCE_TOLERANCE:
            raise ValueError(
                f"organic_carbon_percent ({self.organic_carbon_percent}) does not match "
                f"total - inorganic carbon ({expected})"
            )
        return self


class EndUseContext(BaseModel):
    """Where and how the biochar is applied."""

    mean_soil_temp_c: float = Field(
        ..., description="Mean annual soil temperature at the application site (°C)",
    )
    category: EndUseCategory = Field(
        default=EndUseCategory.SOIL_AGRICULTURE, description="End-use category",
    )
    incorporation_method: Optional[str] = Field(
        None, description="How the biochar is incorporated (e.g. tilled, top-dressed)",
    )
    incorporation_depth_cm: Optional[float] = Field(
        None, ge=0, description="Incorporation depth (cm)",
    )

    model_config = _FROZEN


class BaselineScenario(BaseModel):
    """Baseline carbon storage scenario."""

    baseline_type: BaselineType = Field(default=BaselineType.NEW_BUILT)
    baseline_carbon_storage_tco2e: Optional[float] = Field(
        None, ge=0,
        description="Prior carbon storage (tCO2e); required for charcoal_repurpose",
    )

    model_config = _FROZEN


# =============================================================================
# Project emissions (E_project)
# =============================================================================


class BiomassEmissions(BaseModel):
    """Biomass sourcing emissions, kg CO2e."""

    cultivation: float = Field(default=0.0, ge=0, description="Dedicated-crop cultivation")
    collection: float = Field(default=0.0, ge=0)
    transport: float = Field(default=0.0, ge=0, description="Transport to facility")
    preprocessing: float = Field(default=0.0, ge=0, description="Chipping, drying")

    model_config = _FROZEN

    @classmethod
    def zero(cls) -> BiomassEmissions:
        return cls()


class ProductionEmissions(BaseModel):
    """Production emissions. Stack CH4 and N2O are kg of gas, the rest kg CO2e."""

    energy: float = Field(default=0.0, ge=0, description="Start-up fuel, electricity")
    materials: float = Field(default=0.0, ge=0, description="Consumables, chemicals")
    waste: float = Field(default=0.0, ge=0)
    stack_ch4_kg: float = Field(default=0.0, ge=0, description="Direct CH4 at stack (kg CH4)")
    stack_n2o_kg: float = Field(default=0.0, ge=0, description="Direct N2O at stack (kg N2O)")
    fossil_co2_kg: float = Field(default=0.0, ge=0, description="Fossil CO2 from impurities")
    maintenance: float = Field(default=0.0, ge=0)

    model_config = _FROZEN

    @classmethod
    def zero(cls) -> ProductionEmissions:
        return cls()


class EmbodiedEmissions(BaseModel):
    """Amortized infrastructure and direct land-use change, kg CO2e."""

    infrastructure: float = Field(default=0.0, ge=0)
    dluc: float = Field(default=0.0, ge=0, description="Direct land use change")

    model_config = _FROZEN

    @classmethod
    def zero(cls) -> EmbodiedEmissions:
        return cls()


class EndUseEmissions(BaseModel):
    """End-use emissions, kg CO2e."""

    transport: float = Field(default=0.0, ge=0, description="Transport to end-use site")
    packaging: float = Field(default=0.0, ge=0)
    incorporation: float = Field(default=0.0, ge=0)

    model_config = _FROZEN

    @classmethod
    def zero(cls) -> EndUseEmissions:
        return cls()


class ProjectEmissionsInput(BaseModel):
    """E_project = E_biomass + E_production + E_use + E_emb."""

    biomass: BiomassEmissions = Field(default_factory=BiomassEmissions)
    production: ProductionEmissions = Field(default_factory=ProductionEmissions)
    embodied: EmbodiedEmissions = Field(default_factory=EmbodiedEmissions)
    end_use: EndUseEmissions = Field(default_factory=EndUseEmissions)
    co_product_allocation_factor: Optional[float] = Field(
        None,
        description="Share of production emissions allocated to biochar, (0, 1]",
    )

    model_config = _FROZEN

    @classmethod
    def zero(cls) -> ProjectEmissionsInput:
        return cls(co_product_allocation_factor=1.0)


# =============================================================================
# Leakage (E_leakage)
# =============================================================================


class EcologicalLeakage(BaseModel):
    """L_ECO components, kg CO2e."""

    facility: float = Field(default=0.0, ge=0, description="Facility construction/extension")
    biomass_sourcing: float = Field(default=0.0, ge=0, description="Biomass sourcing area")

    model_config = _FROZEN


class MarketActivityLeakage(BaseModel):
    """L_MA components, kg CO2e."""

    afolu: float = Field(default=0.0, ge=0, description="AFOLU sector displacement")
    energy_material: float = Field(default=0.0, ge=0, description="Energy/material market")
    iluc: float = Field(default=0.0, ge=0, description="Indirect land use change")

    model_config = _FROZEN


class LeakageInput(BaseModel):
    """E_leakage = L_ECO + L_MA."""

    ecological: EcologicalLeakage = Field(default_factory=EcologicalLeakage)
    market_activity: MarketActivityLeakage = Field(default_factory=MarketActivityLeakage)

    model_config = _FROZEN

    @classmethod
    def zero(cls) -> LeakageInput:
        return cls()


class ILUCInput(BaseModel):
    """Inputs for the iLUC sub-calculation (Section 8.6)."""

    quantity_dry_tonnes: float
    lower_heating_value_gj: float = Field(..., description="GJ per dry tonne")
    iluc_factor_kg_co2e_per_mj: float
    attribution_factor: float = 1.0

    model_config = _FROZEN


# =============================================================================
# Aggregate input
# =============================================================================


class CORCInput(BaseModel):
    """Everything needed for one monitoring-period CORC calculation."""

    composition: BiocharComposition
    end_use: EndUseContext
    baseline: BaselineScenario = Field(default_factory=BaselineScenario)
    project_emissions: ProjectEmissionsInput = Field(default_factory=ProjectEmissionsInput)
    leakage: LeakageInput = Field(default_factory=LeakageInput)

    model_config = _FROZEN
