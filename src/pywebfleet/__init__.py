"""pywebfleet - Async Python client reconciling Webfleet cold-chain telemetry."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pywebfleet")
except PackageNotFoundError:
    __version__ = "0+local"
from pywebfleet.client import WebfleetClient
from pywebfleet.config import WebfleetConfig
from pywebfleet.exceptions import (
    WebfleetApiError,
    WebfleetAuthenticationError,
    WebfleetConfigError,
    WebfleetError,
    WebfleetTransportError,
)
from pywebfleet.models import (
    DoorState,
    HistoricalDataPoint,
    LocationSample,
    ObjectType,
    TemperatureReading,
    Vehicle,
)
from pywebfleet.state import sensor_ids

__all__ = [
    "__version__",
    "DoorState",
    "HistoricalDataPoint",
    "LocationSample",
    "ObjectType",
    "TemperatureReading",
    "Vehicle",
    "WebfleetApiError",
    "WebfleetAuthenticationError",
    "WebfleetClient",
    "WebfleetConfig",
    "WebfleetConfigError",
    "WebfleetError",
    "WebfleetTransportError",
    "sensor_ids",
]
