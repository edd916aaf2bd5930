"""Derived figures for dashboards.

Pure functions over an :class:`EmissionsSnapshot`; nothing here changes
ledger state.
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict

from pyfootprint._constants import STATUS_EXCELLENT_BELOW, STATUS_GOOD_BELOW, TONNE_KG
from pyfootprint.ledger.factors import electricity_reading, transport_reading, waste_reading
from pyfootprint.models.readings import EmissionsSnapshot
from pyfootprint.normalize import coerce_quantity


class EmissionsStatus(StrEnum):
    EXCELLENT = "Excellent"
    GOOD = "Good"
    NEEDS_IMPROVEMENT = "Needs Improvement"


class BreakdownItem(BaseModel):
    """One slice of an emissions breakdown."""

    model_config = ConfigDict(frozen=True)

    name: str
    emissions: float
    share: float


def format_emissions(kg: float) -> str:
    """``"12.3 kg"`` below one tonne, ``"1.2 tons"`` from one tonne up."""
    if kg >= TONNE_KG:
        return f"{kg / TONNE_KG:.1f} tons"
    return f"{kg:.1f} kg"


def emissions_status(total: float) -> EmissionsStatus:
    if total < STATUS_EXCELLENT_BELOW:
        return EmissionsStatus.EXCELLENT
    if total < STATUS_GOOD_BELOW:
        return EmissionsStatus.GOOD
    return EmissionsStatus.NEEDS_IMPROVEMENT


def _breakdown(values: list[tuple[str, float]]) -> list[BreakdownItem]:
    present = [(name, value) for name, value in values if value > 0]
    total = sum(value for _, value in present)
    return [BreakdownItem(name=name, emissions=value, share=value / total) for name, value in present]


def category_breakdown(snapshot: EmissionsSnapshot) -> list[BreakdownItem]:
    """Electricity/transport/waste shares; empty categories are left out."""
    return _breakdown(
        [
            ("Electricity", snapshot.electricity.emissions),
            ("Transport", snapshot.transport_emissions),
            ("Waste", snapshot.waste.emissions),
        ]
    )


def transport_breakdown(snapshot: EmissionsSnapshot) -> list[BreakdownItem]:
    """Per-mode transport shares; modes without emissions are left out."""
    return _breakdown([(mode.capitalize(), reading.emissions) for mode, reading in snapshot.transport.items()])


def preview_emissions(
    *,
    kwh: Any = 0,
    transport: Mapping[str, Any] | None = None,
    kg: Any = 0,
) -> dict[str, float]:
    """Estimate emissions for form values that have not been dispatched yet."""
    transport_total = 0.0
    for mode, km in (transport or {}).items():
        transport_total += transport_reading(str(mode), coerce_quantity(km)).emissions
    electricity = electricity_reading(coerce_quantity(kwh)).emissions
    waste = waste_reading(coerce_quantity(kg)).emissions
    return {
        "electricity": electricity,
        "transport": transport_total,
        "waste": waste,
        "total": electricity + transport_total + waste,
    }
