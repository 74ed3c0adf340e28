"""Port: strategic-diagram chart rendering."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from thematicmap.domain.models import QuadrantMap


class RendererPort(ABC):
    """Turn a plot-ready quadrant map into a chart object."""

    @abstractmethod
    def render(self, quadrant_map: QuadrantMap, *, title: str = "") -> Any:
        """Return a renderer-specific figure."""

    @abstractmethod
    def save(self, figure: Any, path: str) -> None:
        """Write *figure* to *path*."""
