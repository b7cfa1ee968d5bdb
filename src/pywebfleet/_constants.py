"""Internal constants shared across the library."""

BASE_URL = "https://csv.webfleet.com/extern"
ERROR_MESSAGE_HEADER = "X-Webfleet-Errormessage"
EMPTY_DOCUMENT_MARKER = "document is empty"

#: Placeholder used when a position carries no reverse-geocoded text.
DEFAULT_ADDRESS = "Address not available"

#: Webfleet reports coordinates in micro-degrees.
MICRODEGREES_PER_DEGREE = 1_000_000

DAY_MS = 24 * 3600 * 1000

# ------------------------------------------------------------------
# Extern actions
# ------------------------------------------------------------------

USER_REPORT_ACTION = "showUserReportExtern"
OBJECT_REPORT_ACTION = "showObjectReportExtern"
CURRENT_TEMPERATURE_ACTION = "getCurrentTemperatureData"
CURRENT_DOOR_STATUS_ACTION = "getCurrentRefrigeratedDoorStatusData"
HISTORICAL_TEMPERATURE_ACTION = "getHistoricalTemperatureData"
HISTORICAL_DOOR_STATUS_ACTION = "getHistoricalRefrigeratedDoorStatusData"
TRACK_ACTION = "showTracks"
