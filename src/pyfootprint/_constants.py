"""Internal constants shared across the library."""

# ------------------------------------------------------------------
# Conversion factors (kg CO2e per unit)
# ------------------------------------------------------------------

ELECTRICITY_FACTOR = 0.5  # per kWh
WASTE_FACTOR = 2.53  # per kg

TRANSPORT_FACTORS: dict[str, float] = {
    "car": 0.2,  # per km
    "bus": 0.1,
    "train": 0.04,
    "flight": 0.25,
}
DEFAULT_TRANSPORT_MODE = "car"
DEFAULT_TRANSPORT_MODES: tuple[str, ...] = ("car", "bus", "train", "flight")

# ------------------------------------------------------------------
# Persisted record keys
# ------------------------------------------------------------------

SNAPSHOT_KEY = "currentSnapshot"
REGISTRY_KEY = "accountRegistry"
SESSION_KEY = "currentSession"

# ------------------------------------------------------------------
# Dashboard thresholds (kg CO2e)
# ------------------------------------------------------------------

TONNE_KG = 1000.0
STATUS_EXCELLENT_BELOW = 1000.0
STATUS_GOOD_BELOW = 2000.0
