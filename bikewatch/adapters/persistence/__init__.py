from .http_bikeshare_source import HttpBikeshareDataSource
from .local_bikeshare_source import LocalBikeshareDataSource

__all__ = [
    "HttpBikeshareDataSource",
    "LocalBikeshareDataSource",
]
