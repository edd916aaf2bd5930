"""Emissions ledger state container.

This is the only component allowed to change consumption readings. Every
mutation re-derives emissions through :mod:`pyfootprint.ledger.factors`,
persists the full snapshot and then notifies listeners.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable, Mapping
from typing import Any

from pyfootprint._constants import SNAPSHOT_KEY
from pyfootprint.ledger.factors import (
    electricity_reading,
    recompute_transport,
    total_emissions,
    transport_reading,
    waste_reading,
)
from pyfootprint.ledger.intents import Reset, SetElectricity, SetTransportMode, SetWaste, parse_intent
from pyfootprint.models.readings import EmissionsSnapshot, TransportReading, default_snapshot
from pyfootprint.normalize import coerce_quantity
from pyfootprint.storage import KeyValueStorage

_logger = logging.getLogger(__name__)

SnapshotListener = Callable[[EmissionsSnapshot], None]


def _optional_type(value: Any) -> str | None:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def _transport_entry(mode: str, value: Any) -> TransportReading:
    """Build the reading for one incoming transport entry.

    Accepts ``{"km": ..., "type": ...}`` mappings, readings/intents with
    ``km``/``type`` attributes, or a bare distance.
    """
    if isinstance(value, Mapping):
        km = coerce_quantity(value.get("km"))
        mode_type = _optional_type(value.get("type"))
    elif isinstance(value, (TransportReading, SetTransportMode)):
        km = value.km
        mode_type = _optional_type(value.type)
    else:
        km = coerce_quantity(value)
        mode_type = None
    return transport_reading(mode, km, mode_type)


class EmissionsLedger:
    """Owns the emissions snapshot and answers update intents.

    Construction loads the persisted snapshot (if any) by replaying it
    through the update operations, so stored emissions and totals are
    always re-derived from the stored quantities.

    Usage::

        ledger = EmissionsLedger(FileStorage("data"))
        unsubscribe = ledger.subscribe(render)
        ledger.update_electricity(100)
        ledger.dispatch({"kind": "set_waste", "kg": 10})
    """

    def __init__(
        self,
        storage: KeyValueStorage,
        *,
        key: str = SNAPSHOT_KEY,
    ) -> None:
        self._storage = storage
        self._key = key
        self._listeners: list[SnapshotListener] = []
        self._snapshot = default_snapshot()
        self._restore()

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------

    @property
    def snapshot(self) -> EmissionsSnapshot:
        return self._snapshot

    @property
    def total_emissions(self) -> float:
        return self._snapshot.total_emissions

    # ------------------------------------------------------------------
    # Observers
    # ------------------------------------------------------------------

    def subscribe(self, listener: SnapshotListener) -> Callable[[], None]:
        """Register *listener*; returns a callable that unregisters it."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def close(self) -> None:
        """Drop every listener. The persisted snapshot is left as is."""
        self._listeners.clear()

    def _notify(self, snapshot: EmissionsSnapshot) -> None:
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception:
                _logger.debug("Snapshot listener failed", exc_info=True)

    # ------------------------------------------------------------------
    # Intents
    # ------------------------------------------------------------------

    def dispatch(self, intent: Any) -> EmissionsSnapshot:
        """Apply a tagged intent (model or dict). Malformed intents are ignored."""
        parsed = parse_intent(intent)
        if isinstance(parsed, SetElectricity):
            return self.update_electricity(parsed.kwh)
        if isinstance(parsed, SetTransportMode):
            return self.update_transport({parsed.mode: parsed})
        if isinstance(parsed, SetWaste):
            return self.update_waste(parsed.kg)
        if isinstance(parsed, Reset):
            return self.reset()
        return self._snapshot

    def update_electricity(self, kwh: Any) -> EmissionsSnapshot:
        electricity = electricity_reading(coerce_quantity(kwh))
        _logger.debug("Electricity set to %s kWh (%s kg CO2e)", electricity.kwh, electricity.emissions)
        return self._commit(electricity=electricity)

    def update_transport(self, modes: Mapping[str, Any]) -> EmissionsSnapshot:
        """Merge one or more transport modes into the current mapping.

        Modes missing from *modes* are kept. Emissions are then re-derived
        for every mode of the merged mapping, not only the updated ones.
        """
        merged: dict[str, TransportReading] = dict(self._snapshot.transport)
        if isinstance(modes, Mapping):
            for raw_mode, value in modes.items():
                mode = str(raw_mode).strip()
                if not mode:
                    continue
                merged[mode] = _transport_entry(mode, value)
        else:
            _logger.debug("Ignoring transport update that is not a mapping: %r", modes)
        transport = recompute_transport(merged)
        _logger.debug("Transport updated: %s", list(modes) if isinstance(modes, Mapping) else [])
        return self._commit(transport=transport)

    def update_waste(self, kg: Any) -> EmissionsSnapshot:
        waste = waste_reading(coerce_quantity(kg))
        _logger.debug("Waste set to %s kg (%s kg CO2e)", waste.kg, waste.emissions)
        return self._commit(waste=waste)

    def reset(self) -> EmissionsSnapshot:
        """Restore the default snapshot and overwrite the persisted copy."""
        _logger.debug("Resetting emissions ledger")
        snapshot = default_snapshot()
        self._snapshot = snapshot
        self._persist(snapshot)
        self._notify(snapshot)
        return snapshot

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _commit(self, **changes: Any) -> EmissionsSnapshot:
        current = self._snapshot
        electricity = changes.get("electricity", current.electricity)
        transport = changes.get("transport", current.transport)
        waste = changes.get("waste", current.waste)
        snapshot = EmissionsSnapshot(
            electricity=electricity,
            transport=transport,
            waste=waste,
            total_emissions=total_emissions(electricity, transport, waste),
        )
        self._snapshot = snapshot
        self._persist(snapshot)
        self._notify(snapshot)
        return snapshot

    def _persist(self, snapshot: EmissionsSnapshot) -> None:
        self._storage.set(self._key, snapshot.to_json())

    def _restore(self) -> None:
        raw = self._storage.get(self._key)
        if raw is None:
            return
        try:
            saved = json.loads(raw)
        except (TypeError, ValueError):
            _logger.warning("Discarding unparseable persisted snapshot under %r", self._key)
            return
        if not isinstance(saved, dict):
            _logger.warning("Discarding persisted snapshot under %r: not an object", self._key)
            return

        electricity = saved.get("electricity")
        if isinstance(electricity, Mapping):
            self.update_electricity(electricity.get("kwh"))

        transport = saved.get("transport")
        if isinstance(transport, Mapping):
            for mode, entry in transport.items():
                self.update_transport({mode: entry})

        waste = saved.get("waste")
        if isinstance(waste, Mapping):
            self.update_waste(waste.get("kg"))

        _logger.debug("Restored emissions snapshot: total=%s", self._snapshot.total_emissions)
