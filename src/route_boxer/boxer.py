"""The RouteBoxer class takes a path, such as the polyline of a route, and
generates a set of bounding boxes which together contain every point within
a given distance of that route. These boxes can then be used to drive
spatial searches which support filtering by bounds, in order to implement
search along a route.

RouteBoxer overlays a grid of the specified size on the route, identifies
every grid cell that the route passes through, and generates a set of bounds
that cover all of these cells, and their nearest neighbours. Consequently
the bounds returned will extend up to ~3x the specified distance from the
route in places.

Routes which cross the antimeridian are not supported."""

import logging
import math
from typing import List, Optional, Sequence

from route_boxer.containers import (
    BoxerConfig,
    GeoBounds,
    PointLike,
    as_geo_point,
)
from route_boxer.exceptions import InvalidDistanceError
from route_boxer.geo.rhumb import route_length
from route_boxer.grid.box_merger import BoxMerger
from route_boxer.grid.cell_marker import CellMarker
from route_boxer.grid.grid_builder import GridBuilder

logger = logging.getLogger(__name__)


def _validate_distance(dist) -> float:
    try:
        valid = float(dist)
    except (TypeError, ValueError) as exc:
        raise InvalidDistanceError(
            f"Buffer distance must be a number, got {dist!r}"
        ) from exc
    if not math.isfinite(valid) or valid <= 0:
        raise InvalidDistanceError(
            f"Buffer distance must be positive and finite, got {dist!r}"
        )
    return valid


class RouteBoxer:
    """Generates boxes around routes. The instance holds configuration only;
    all working state is created afresh for each call to box, so a single
    instance can safely be shared between threads."""

    def __init__(self, config: Optional[BoxerConfig] = None):
        self.config = config or BoxerConfig()

    def box(
        self, path: Sequence[PointLike], range_km: float
    ) -> List[GeoBounds]:
        """Generate boxes for a given route and distance

        Args:
            path (Sequence[PointLike]): The vertices of the route, either as
              GeoPoints or (lat, lng) pairs. At least 2 are required.
            range_km (float): The distance in km around the route that the
              generated boxes must cover

        Raises:
            InvalidCoordinateError: If any vertex is not a valid coordinate
            InvalidDistanceError: If range_km is not a positive number
            ValueError: If fewer than 2 vertices are provided
            GridTooLargeError: If range_km is too small for the length of the
              route
            NumericDegeneracyError: If the grid cannot be extended to enclose
              the route, e.g. close to a pole or the antimeridian

        Returns:
            List[GeoBounds]: A set of boxes which covers the whole route
        """
        vertices = [as_geo_point(point) for point in path]
        if len(vertices) < 2:
            raise ValueError(
                f"At least 2 vertices are required, got {len(vertices)}"
            )
        range_km = _validate_distance(range_km)

        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                "Boxing route of %d vertices (%.3f km) with a %s km buffer",
                len(vertices),
                route_length(vertices),
                range_km,
            )

        # Build the grid that is overlaid on the route
        grid = GridBuilder(self.config).build(vertices, range_km)

        # Identify the grid cells that the route intersects
        marks = CellMarker(grid, self.config).mark_route(vertices)

        # Merge adjacent intersected grid cells (and their neighbours) into
        # two sets of bounds, keeping whichever has the fewest elements
        return BoxMerger(grid, marks).select()


def compute_coverage_boxes(
    points: Optional[Sequence[PointLike]],
    buffer_distance_m: Optional[float] = None,
    config: Optional[BoxerConfig] = None,
) -> List[List[List[float]]]:
    """Calculate a set of boxes which together cover every point within a
    buffer distance of a route

    Args:
        points (Optional[Sequence[PointLike]]): The route, as an ordered
          sequence of (lat, lng) pairs
        buffer_distance_m (Optional[float], optional): The buffer distance in
          metres. Defaults to config.default_buffer_m (20m).
        config (Optional[BoxerConfig], optional): Tunable options. Defaults
          to BoxerConfig().

    Returns:
        List[List[List[float]]]: Each box as
          [[south_west_lat, south_west_lng], [north_east_lat, north_east_lng]].
          Empty if fewer than 2 points are provided.
    """
    config = config or BoxerConfig()
    if points is None or len(points) < 2:
        return []

    if buffer_distance_m is None:
        buffer_distance_m = config.default_buffer_m
    range_km = _validate_distance(buffer_distance_m) / 1000

    boxes = RouteBoxer(config).box(points, range_km)
    return [box.to_list() for box in boxes]
