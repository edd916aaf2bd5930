"""Emission arithmetic.

Every emissions value in the ledger is produced here, from a quantity and
a fixed factor. Nothing else multiplies or sums emissions.
"""

from __future__ import annotations

from collections.abc import Mapping

from pyfootprint._constants import (
    DEFAULT_TRANSPORT_MODE,
    ELECTRICITY_FACTOR,
    TRANSPORT_FACTORS,
    WASTE_FACTOR,
)
from pyfootprint.models.readings import ElectricityReading, TransportReading, WasteReading


def transport_factor(mode_type: str | None) -> float:
    """Factor for a transport type; unknown types use the car factor."""
    if mode_type is None:
        return TRANSPORT_FACTORS[DEFAULT_TRANSPORT_MODE]
    return TRANSPORT_FACTORS.get(mode_type, TRANSPORT_FACTORS[DEFAULT_TRANSPORT_MODE])


def electricity_reading(kwh: float) -> ElectricityReading:
    return ElectricityReading(kwh=kwh, emissions=kwh * ELECTRICITY_FACTOR)


def waste_reading(kg: float) -> WasteReading:
    return WasteReading(kg=kg, emissions=kg * WASTE_FACTOR)


def transport_reading(mode: str, km: float, mode_type: str | None = None) -> TransportReading:
    """Reading for *mode*; the factor comes from *mode_type*, else the mode name."""
    return TransportReading(
        km=km,
        emissions=km * transport_factor(mode_type or mode),
        type=mode_type,
    )


def recompute_transport(readings: Mapping[str, TransportReading]) -> dict[str, TransportReading]:
    """Re-derive emissions for every mode in *readings*."""
    return {mode: transport_reading(mode, reading.km, reading.type) for mode, reading in readings.items()}


def total_emissions(
    electricity: ElectricityReading,
    transport: Mapping[str, TransportReading],
    waste: WasteReading,
) -> float:
    transport_total = sum(reading.emissions for reading in transport.values())
    return electricity.emissions + transport_total + waste.emissions
