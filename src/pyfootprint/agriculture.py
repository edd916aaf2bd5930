"""Agriculture and water-use emission calculator.

Standalone estimates; results are not recorded in the emissions ledger.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

from pyfootprint._constants import ELECTRICITY_FACTOR
from pyfootprint.normalize import coerce_quantity

FERTILIZER_FACTORS: dict[str, float] = {
    "nitrogen": 2.1,
    "phosphorus": 1.8,
    "potassium": 1.5,
    "organic": 0.8,
}
DEFAULT_FERTILIZER = "nitrogen"

# Litres of water needed per hectare.
CROP_WATER_NEEDS: dict[str, float] = {
    "wheat": 500.0,
    "rice": 1200.0,
    "corn": 600.0,
    "soybeans": 400.0,
    "cotton": 800.0,
}
DEFAULT_CROP = "wheat"

# Simplified litres pumped per kWh of irrigation.
_LITRES_PER_PUMP_KWH = 100.0


class AgricultureInput(BaseModel):
    """Form values of the agriculture calculator. Invalid numbers become 0."""

    model_config = ConfigDict(frozen=True)

    pump_hours: float = 0.0
    pump_power_kw: float = 0.0
    fertilizer_kg: float = 0.0
    fertilizer_type: str = DEFAULT_FERTILIZER
    treated_litres: float = 0.0
    treatment_kwh_per_1000l: float = 0.0
    crop_hectares: float = 0.0
    crop_type: str = DEFAULT_CROP

    @field_validator(
        "pump_hours",
        "pump_power_kw",
        "fertilizer_kg",
        "treated_litres",
        "treatment_kwh_per_1000l",
        "crop_hectares",
        mode="before",
    )
    @classmethod
    def _coerce(cls, value: object) -> float:
        return coerce_quantity(value)


class AgricultureEstimate(BaseModel):
    model_config = ConfigDict(frozen=True)

    irrigation: float
    fertilizer: float
    water_treatment: float
    total: float
    water_efficiency: float = Field(description="Percent, 0-100")


def irrigation_emissions(hours: float, power_kw: float) -> float:
    return hours * power_kw * ELECTRICITY_FACTOR


def fertilizer_emissions(kg: float, fertilizer_type: str) -> float:
    factor = FERTILIZER_FACTORS.get(fertilizer_type, FERTILIZER_FACTORS[DEFAULT_FERTILIZER])
    return kg * factor


def water_treatment_emissions(litres: float, kwh_per_1000l: float) -> float:
    return (litres / 1000.0) * kwh_per_1000l * ELECTRICITY_FACTOR


def water_efficiency(hectares: float, crop_type: str, pump_hours: float, pump_power_kw: float) -> float:
    """Water needed by the crop as a percentage of water pumped, capped at 100."""
    needed = hectares * CROP_WATER_NEEDS.get(crop_type, CROP_WATER_NEEDS[DEFAULT_CROP])
    if needed == 0:
        return 0.0
    used = pump_hours * pump_power_kw * _LITRES_PER_PUMP_KWH
    if used <= 0:
        return 100.0
    return min(100.0, needed / used * 100.0)


def estimate(data: AgricultureInput) -> AgricultureEstimate:
    irrigation = irrigation_emissions(data.pump_hours, data.pump_power_kw)
    fertilizer = fertilizer_emissions(data.fertilizer_kg, data.fertilizer_type)
    treatment = water_treatment_emissions(data.treated_litres, data.treatment_kwh_per_1000l)
    return AgricultureEstimate(
        irrigation=irrigation,
        fertilizer=fertilizer,
        water_treatment=treatment,
        total=irrigation + fertilizer + treatment,
        water_efficiency=water_efficiency(data.crop_hectares, data.crop_type, data.pump_hours, data.pump_power_kw),
    )
