"""Internal constants shared across the library."""

# ------------------------------------------------------------------
# Glow-plug pre-warm policy
# ------------------------------------------------------------------

#: Outside temperature (°F) at or below which diesel glow plugs are cycled.
GLOW_PLUG_THRESHOLD_F: float = 50.0

#: Length of one countdown tick in seconds.
GLOW_PLUG_TICK_SECONDS: float = 1.0

#: Temperature assumed when no status has been cached yet.
UNKNOWN_OUTSIDE_TEMP_F: float = 0.0

# ------------------------------------------------------------------
# Command banner / history
# ------------------------------------------------------------------

#: Seconds a terminal Success/Error state stays visible before resetting to Idle.
RESET_DELAY_SECONDS: float = 2.0

#: Number of command records kept in history.
HISTORY_LIMIT: int = 5

COMMAND_FAILED_MESSAGE = "Failed to send command"
STATUS_FAILED_MESSAGE = "Failed to load status"

# ------------------------------------------------------------------
# Weather lookup
# ------------------------------------------------------------------

WEATHER_BASE_URL = "https://api.open-meteo.com"
WEATHER_FORECAST_PATH = "/v1/forecast"
WEATHER_FALLBACK_TEMP_F: float = 68.0
WEATHER_TIMEOUT_SECONDS: float = 10.0
