from .bikewatch import BikewatchError, DatasetLoadError, MapNotReadyError

__all__ = ["BikewatchError", "DatasetLoadError", "MapNotReadyError"]
