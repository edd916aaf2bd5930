"""Emissions ledger.

This package owns the canonical consumption readings. It is the only place
where quantities are converted into emissions and where the snapshot is
persisted and replayed.
"""

from pyfootprint.ledger.intents import Intent, Reset, SetElectricity, SetTransportMode, SetWaste, parse_intent
from pyfootprint.ledger.store import EmissionsLedger, SnapshotListener

__all__ = [
    "EmissionsLedger",
    "Intent",
    "Reset",
    "SetElectricity",
    "SetTransportMode",
    "SetWaste",
    "SnapshotListener",
    "parse_intent",
]
