"""Roof outline geometry: geodesic polygon area and editable outlines."""

from __future__ import annotations

import logging
import math
from typing import Callable, Protocol, Sequence

from solarquote.models import (
    LatLng,
    Orientation,
    PolygonEdit,
    PolygonEditKind,
    RoofGeometryResult,
)

logger = logging.getLogger(__name__)

# Radius used by the map SDK's spherical geometry library
EARTH_RADIUS_M = 6_378_137.0

AreaListener = Callable[[float], None]


class AreaCalculator(Protocol):
    """Anything that can measure the area of a lat/lng polygon in m²."""

    def __call__(self, path: Sequence[LatLng]) -> float: ...


def _polar_triangle_area(tan1: float, lng1: float, tan2: float, lng2: float) -> float:
    """Signed area of the triangle formed by two vertices and the south pole."""
    delta = lng1 - lng2
    t = tan1 * tan2
    return 2 * math.atan2(t * math.sin(delta), 1 + t * math.cos(delta))


def compute_signed_area(path: Sequence[LatLng], radius: float = EARTH_RADIUS_M) -> float:
    """Signed spherical area of a closed path; counter-clockwise is positive.

    Args:
        path: Polygon vertices; the closing edge is implied.
        radius: Sphere radius in meters.

    Returns:
        Area in square meters, 0 for fewer than three vertices.
    """
    if len(path) < 3:
        return 0.0

    total = 0.0
    prev = path[-1]
    prev_tan = math.tan((math.pi / 2 - math.radians(prev.lat)) / 2)
    prev_lng = math.radians(prev.lng)
    for point in path:
        tan = math.tan((math.pi / 2 - math.radians(point.lat)) / 2)
        lng = math.radians(point.lng)
        total += _polar_triangle_area(tan, lng, prev_tan, prev_lng)
        prev_tan, prev_lng = tan, lng

    return total * radius * radius


def compute_area(path: Sequence[LatLng], radius: float = EARTH_RADIUS_M) -> float:
    """Unsigned spherical area of a polygon in square meters."""
    return abs(compute_signed_area(path, radius))


class RoofOutline:
    """An editable roof polygon exposing only area and change notification.

    Usage:
        outline = RoofOutline(points)
        outline.on_polygon_change(lambda area: print(area))
        outline.set_at(2, LatLng(lat=37.77, lng=-122.41))
    """

    def __init__(
        self,
        points: Sequence[LatLng] = (),
        area_calculator: AreaCalculator = compute_area,
    ) -> None:
        self._points: list[LatLng] = list(points)
        self._area_calculator = area_calculator
        self._listeners: list[AreaListener] = []
        self._area = self._area_calculator(self._points)

    @property
    def points(self) -> list[LatLng]:
        return list(self._points)

    @property
    def area_m2(self) -> float:
        return self._area

    def compute_area(self) -> float:
        """Recompute and return the current area."""
        self._area = self._area_calculator(self._points)
        return self._area

    def on_polygon_change(self, callback: AreaListener) -> None:
        """Register a callback invoked with the new area after every edit."""
        self._listeners.append(callback)

    def set_at(self, index: int, point: LatLng) -> None:
        """Move an existing vertex."""
        if not 0 <= index < len(self._points):
            raise IndexError(f"Vertex {index} out of range (0-{len(self._points) - 1})")
        self._points[index] = point
        self._changed()

    def insert_at(self, index: int, point: LatLng) -> None:
        """Insert a vertex before ``index``; ``index == len`` appends."""
        if not 0 <= index <= len(self._points):
            raise IndexError(f"Insert position {index} out of range (0-{len(self._points)})")
        self._points.insert(index, point)
        self._changed()

    def replace(self, points: Sequence[LatLng]) -> None:
        """Discard the current outline in favour of a newly drawn one."""
        self._points = list(points)
        self._changed()

    def apply(self, edit: PolygonEdit) -> None:
        if edit.kind == PolygonEditKind.SET_AT:
            self.set_at(edit.index, edit.point)
        else:
            self.insert_at(edit.index, edit.point)

    def to_roof_geometry(self, orientation: Orientation = Orientation.SOUTH) -> RoofGeometryResult:
        return RoofGeometryResult(
            area_m2=self._area,
            orientation=orientation,
            polygon_points=self.points,
        )

    def _changed(self) -> None:
        area = self.compute_area()
        for listener in self._listeners:
            listener(area)


def measure_roof(
    points: Sequence[LatLng],
    orientation: Orientation = Orientation.SOUTH,
    edits: Sequence[PolygonEdit] = (),
) -> RoofGeometryResult:
    """Measure a drawn roof outline after replaying the user's vertex edits.

    Raises:
        IndexError: If an edit refers to a vertex that does not exist.
    """
    outline = RoofOutline(points)
    outline.on_polygon_change(
        lambda area: logger.debug("Roof outline edited: %.1f m²", area)
    )
    for edit in edits:
        outline.apply(edit)

    logger.info(
        "Measured roof: %d vertices, %.1f m², facing %s",
        len(outline.points), outline.area_m2, orientation.value,
    )
    return outline.to_roof_geometry(orientation)
