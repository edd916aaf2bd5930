"""Consumption readings and the emissions snapshot."""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType

from pydantic import Field, field_serializer, field_validator

from pyfootprint._constants import DEFAULT_TRANSPORT_MODES
from pyfootprint.models._base import FootprintModel


class ElectricityReading(FootprintModel):
    """Electricity usage in kWh and its derived emissions (kg CO2e)."""

    kwh: float = 0.0
    emissions: float = 0.0


class TransportReading(FootprintModel):
    """Distance travelled with one transport mode.

    ``type`` names the factor the emissions were derived with. It is only
    set (and persisted) when a caller chose it explicitly; otherwise the
    mode name selects the factor.
    """

    km: float = 0.0
    emissions: float = 0.0
    type: str | None = None


class WasteReading(FootprintModel):
    """Waste produced in kg and its derived emissions (kg CO2e)."""

    kg: float = 0.0
    emissions: float = 0.0


class Suggestion(FootprintModel):
    """Static reduction suggestion shown next to the snapshot."""

    id: int
    title: str
    description: str
    impact: str
    category: str
    icon: str


DEFAULT_SUGGESTIONS: tuple[Suggestion, ...] = (
    Suggestion(
        id=1,
        title="Switch to Renewable Energy",
        description="Switch to renewable energy to save 2.5 tons of CO₂ annually",
        impact="2.5 tons CO₂",
        category="energy",
        icon="⚡",
    ),
    Suggestion(
        id=2,
        title="Reduce Car Travel",
        description="Reduce car travel by 10% to save 0.8 tons of CO₂ annually",
        impact="0.8 tons CO₂",
        category="transport",
        icon="🚗",
    ),
    Suggestion(
        id=3,
        title="Improve Waste Management",
        description="Recycle waste to cut emissions by 30%",
        impact="30% reduction",
        category="waste",
        icon="♻️",
    ),
    Suggestion(
        id=4,
        title="Use Public Transport",
        description="Switch to public transport for daily commute",
        impact="1.2 tons CO₂",
        category="transport",
        icon="🚌",
    ),
)


def _default_transport() -> dict[str, TransportReading]:
    return {mode: TransportReading() for mode in DEFAULT_TRANSPORT_MODES}


class EmissionsSnapshot(FootprintModel):
    """Internally consistent emissions state at a point in time.

    Instances are never mutated; the ledger builds a new snapshot (with new
    containers) for every committed change.

    Parameters
    ----------
    electricity : ElectricityReading
        Electricity reading.
    transport : Mapping[str, TransportReading]
        Readings keyed by transport mode. Read-only view.
    waste : WasteReading
        Waste reading.
    total_emissions : float
        Sum of all category emissions, kg CO2e.
    ai_suggestions : tuple[Suggestion, ...]
        Static suggestions, identical for every snapshot.
    """

    electricity: ElectricityReading = Field(default_factory=ElectricityReading)
    transport: Mapping[str, TransportReading] = Field(default_factory=_default_transport, validate_default=True)
    waste: WasteReading = Field(default_factory=WasteReading)
    total_emissions: float = 0.0
    ai_suggestions: tuple[Suggestion, ...] = DEFAULT_SUGGESTIONS

    @field_validator("transport", mode="after")
    @classmethod
    def _freeze_transport(cls, value: Mapping[str, TransportReading]) -> Mapping[str, TransportReading]:
        return MappingProxyType(dict(value))

    @field_serializer("transport")
    def _dump_transport(self, value: Mapping[str, TransportReading]) -> dict[str, TransportReading]:
        return dict(value)

    @property
    def transport_emissions(self) -> float:
        return sum(reading.emissions for reading in self.transport.values())

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True, exclude_none=True)


def default_snapshot() -> EmissionsSnapshot:
    """Fresh default snapshot: every quantity zero, suggestions populated."""
    return EmissionsSnapshot()
