class BikewatchError(Exception):
    """Base exception for station map failures."""


class DatasetLoadError(BikewatchError):
    """Raised when the station or trip dataset cannot be fetched or parsed."""


class MapNotReadyError(BikewatchError):
    """Raised when a redraw is requested before the datasets have loaded."""
