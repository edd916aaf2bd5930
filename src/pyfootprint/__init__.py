"""pyfootprint - personal carbon-footprint ledger."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pyfootprint")
except PackageNotFoundError:
    __version__ = "0+local"
from pyfootprint.accounts import AccountStore
from pyfootprint.app import FootprintServices, open_storage
from pyfootprint.config import FootprintConfig
from pyfootprint.exceptions import FootprintConfigError, FootprintError, FootprintStorageError
from pyfootprint.ledger import (
    EmissionsLedger,
    Reset,
    SetElectricity,
    SetTransportMode,
    SetWaste,
    parse_intent,
)
from pyfootprint.models import (
    AccountRecord,
    ElectricityReading,
    EmissionsSnapshot,
    OperationResult,
    Suggestion,
    TransportReading,
    UserProfile,
    WasteReading,
)
from pyfootprint.storage import FileStorage, KeyValueStorage, MemoryStorage

__all__ = [
    "__version__",
    "AccountRecord",
    "AccountStore",
    "ElectricityReading",
    "EmissionsLedger",
    "EmissionsSnapshot",
    "FileStorage",
    "FootprintConfig",
    "FootprintConfigError",
    "FootprintError",
    "FootprintServices",
    "FootprintStorageError",
    "KeyValueStorage",
    "MemoryStorage",
    "OperationResult",
    "Reset",
    "SetElectricity",
    "SetTransportMode",
    "SetWaste",
    "Suggestion",
    "TransportReading",
    "UserProfile",
    "WasteReading",
    "open_storage",
    "parse_intent",
]
