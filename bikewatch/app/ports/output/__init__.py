from .bikeshare_data_source import IBikeshareDataSource
from .map_view import IMapView, ViewportListener

__all__ = [
    "IBikeshareDataSource",
    "IMapView",
    "ViewportListener",
]
