"""Simulated local environment readings.

Stands in for a live air-quality/weather feed: every tick each metric takes
a bounded random step and is clamped to a plausible range. The helpers at
the bottom classify readings for health alerts.
"""

from __future__ import annotations

import asyncio
import logging
import random
from collections.abc import Callable
from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict

_logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class MetricBounds:
    """Clamp range and maximum step size of one simulated metric."""

    low: float
    high: float
    max_step: float

    def step(self, value: float, rng: random.Random) -> float:
        moved = value + (rng.random() - 0.5) * 2 * self.max_step
        return max(self.low, min(self.high, moved))


AQI_BOUNDS = MetricBounds(low=0.0, high=500.0, max_step=5.0)
TEMPERATURE_BOUNDS = MetricBounds(low=15.0, high=40.0, max_step=1.0)
HUMIDITY_BOUNDS = MetricBounds(low=30.0, high=90.0, max_step=2.5)


class EnvironmentReading(BaseModel):
    model_config = ConfigDict(frozen=True)

    air_quality_index: float = 45.0
    temperature: float = 28.0
    humidity: float = 65.0


class EnvironmentSimulator:
    """Random walk over :class:`EnvironmentReading` values."""

    def __init__(
        self,
        initial: EnvironmentReading | None = None,
        *,
        rng: random.Random | None = None,
    ) -> None:
        self._reading = initial or EnvironmentReading()
        self._rng = rng or random.Random()

    @property
    def reading(self) -> EnvironmentReading:
        return self._reading

    def set_manual(self, reading: EnvironmentReading) -> None:
        """Replace the current values (manual entry), clamped to the valid ranges."""
        self._reading = EnvironmentReading(
            air_quality_index=max(AQI_BOUNDS.low, min(AQI_BOUNDS.high, reading.air_quality_index)),
            temperature=max(TEMPERATURE_BOUNDS.low, min(TEMPERATURE_BOUNDS.high, reading.temperature)),
            humidity=max(HUMIDITY_BOUNDS.low, min(HUMIDITY_BOUNDS.high, reading.humidity)),
        )

    def step(self) -> EnvironmentReading:
        current = self._reading
        self._reading = EnvironmentReading(
            air_quality_index=AQI_BOUNDS.step(current.air_quality_index, self._rng),
            temperature=TEMPERATURE_BOUNDS.step(current.temperature, self._rng),
            humidity=HUMIDITY_BOUNDS.step(current.humidity, self._rng),
        )
        return self._reading


async def run_environment_feed(
    simulator: EnvironmentSimulator,
    on_reading: Callable[[EnvironmentReading], None],
    *,
    interval: float = 5.0,
    stop: asyncio.Event | None = None,
    max_ticks: int | None = None,
) -> None:
    """Step *simulator* every *interval* seconds until *stop* is set.

    Parameters
    ----------
    on_reading
        Called with each new reading. Failures are logged and the feed
        keeps running.
    max_ticks
        Optional upper bound on the number of readings produced.
    """
    if stop is None:
        stop = asyncio.Event()
    ticks = 0
    while not stop.is_set():
        try:
            await asyncio.wait_for(stop.wait(), timeout=interval)
            break
        except TimeoutError:
            pass

        reading = simulator.step()
        try:
            on_reading(reading)
        except Exception:
            _logger.debug("Environment reading callback failed", exc_info=True)

        ticks += 1
        if max_ticks is not None and ticks >= max_ticks:
            break


# ------------------------------------------------------------------
# Classification
# ------------------------------------------------------------------


class AirQualityStatus(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: str
    risk: str


class HealthRisk(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: str
    severity: str
    description: str


_AQI_LEVELS: tuple[tuple[float, str, str], ...] = (
    (50, "Good", "Low"),
    (100, "Moderate", "Low"),
    (150, "Unhealthy for Sensitive Groups", "Medium"),
    (200, "Unhealthy", "High"),
    (300, "Very Unhealthy", "Very High"),
)

_HEAT_LEVELS: tuple[tuple[float, str], ...] = (
    (27, "No Stress"),
    (32, "Caution"),
    (41, "Extreme Caution"),
    (54, "Danger"),
)


def air_quality_status(aqi: float) -> AirQualityStatus:
    for upper, status, risk in _AQI_LEVELS:
        if aqi <= upper:
            return AirQualityStatus(status=status, risk=risk)
    return AirQualityStatus(status="Hazardous", risk="Extreme")


def heat_stress_level(temperature: float, humidity: float) -> str:
    heat_index = temperature + humidity * 0.1
    for upper, level in _HEAT_LEVELS:
        if heat_index < upper:
            return level
    return "Extreme Danger"


def health_risks(total_emissions: float, aqi: float, temperature: float) -> list[HealthRisk]:
    risks: list[HealthRisk] = []
    if total_emissions > 2000:
        risks.append(
            HealthRisk(
                type="Respiratory Issues",
                severity="High",
                description="High emissions may exacerbate asthma and respiratory conditions",
            )
        )
    if aqi > 100:
        risks.append(
            HealthRisk(
                type="Air Quality Impact",
                severity="High" if aqi > 150 else "Medium",
                description="Poor air quality can affect lung function and cardiovascular health",
            )
        )
    if temperature > 30:
        risks.append(
            HealthRisk(
                type="Heat Stress",
                severity="High" if temperature > 35 else "Medium",
                description="High temperatures can cause heat exhaustion and dehydration",
            )
        )
    return risks
