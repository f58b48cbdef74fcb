from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable

from bikewatch.domain.models import ScreenPoint, Viewport, ViewportEvent

ViewportListener = Callable[[ViewportEvent], None]


class IMapView(ABC):
    """Port for the map engine the markers are drawn over."""

    @abstractmethod
    def project(self, *, lon: float, lat: float) -> ScreenPoint:
        """Convert a geographic position into current screen coordinates."""

    @abstractmethod
    def on_viewport_change(self, listener: ViewportListener) -> None:
        """Register a callback fired on pan, zoom, resize and move end."""

    @property
    @abstractmethod
    def viewport(self) -> Viewport:
        """Current camera state."""
