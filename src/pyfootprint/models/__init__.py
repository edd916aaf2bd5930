"""Data models for pyfootprint."""

from pyfootprint.models._base import FootprintModel
from pyfootprint.models.account import AccountRecord, OperationResult, UserProfile
from pyfootprint.models.readings import (
    DEFAULT_SUGGESTIONS,
    ElectricityReading,
    EmissionsSnapshot,
    Suggestion,
    TransportReading,
    WasteReading,
    default_snapshot,
)

__all__ = [
    "AccountRecord",
    "DEFAULT_SUGGESTIONS",
    "ElectricityReading",
    "EmissionsSnapshot",
    "FootprintModel",
    "OperationResult",
    "Suggestion",
    "TransportReading",
    "UserProfile",
    "WasteReading",
    "default_snapshot",
]
