"""Overlays a grid of lat/lng lines on a route, centred on the middle of the
route's bounding box and spaced according to the buffer distance."""

import logging
from collections import deque
from typing import Deque, List, Optional

from route_boxer.containers import (
    BoxerConfig,
    GeoBounds,
    GeoPoint,
    GridLineSet,
)
from route_boxer.exceptions import GridTooLargeError, NumericDegeneracyError
from route_boxer.geo.rhumb import rhumb_destination

logger = logging.getLogger(__name__)

# Bearings which step away from the centre along each axis, as
# (towards the larger value, towards the smaller value)
_AXIS_BEARINGS = {
    "lat": (0.0, 180.0),
    "lng": (90.0, 270.0),
}


class GridBuilder:
    """Class which builds the latitude & longitude grid lines for a single
    route. A new instance should be created for every route, no state is
    shared between builds."""

    def __init__(self, config: BoxerConfig):
        self.config = config

    def _step(
        self, center: GeoPoint, axis: str, bearing: float, dist: float
    ) -> Optional[float]:
        """Travel from the centre of the route along a bearing, returning
        the lat or lng of the destination (or None if it cannot be
        reached)"""
        dest = rhumb_destination(
            center, bearing, dist, radius=self.config.earth_radius_km
        )
        if dest is None:
            return None
        return getattr(dest, axis)

    def _check_line_count(self, lines: Deque[float], axis: str):
        if len(lines) - 1 > self.config.max_grid_cells:
            raise GridTooLargeError(
                f"Over {self.config.max_grid_cells} grid cells required along "
                f"the {axis} axis, try increasing the buffer distance"
            )

    def _build_axis(
        self, center: GeoPoint, bounds: GeoBounds, spacing: float, axis: str
    ) -> List[float]:
        """Starting from the centre of the route's bounding box, define grid
        lines outwards until they extend beyond the edge of the bounding box
        by more than one cell

        Args:
            center (GeoPoint): The centre of the route's bounding box
            bounds (GeoBounds): The bounding box of the route
            spacing (float): The distance between grid lines, in km
            axis (str): Either 'lat' or 'lng'

        Raises:
            NumericDegeneracyError: If not even a single cell can be created
              along this axis, or if the grid cannot be extended far enough
              to enclose the route
            GridTooLargeError: If the number of lines required along this
              axis exceeds the configured maximum

        Returns:
            List[float]: The grid lines for this axis, in ascending order
        """
        forward, backward = _AXIS_BEARINGS[axis]
        upper = getattr(bounds.north_east, axis)
        lower = getattr(bounds.south_west, axis)

        lines = deque([getattr(center, axis)])
        first = self._step(center, axis, forward, spacing)
        if first is None or first <= lines[0]:
            raise NumericDegeneracyError(
                f"Unable to place grid lines around {center} along the {axis} "
                "axis"
            )
        lines.append(first)

        # Add lines outwards towards the larger value
        inx = 2
        while lines[-2] < upper:
            line = self._step(center, axis, forward, spacing * inx)
            if line is None or line <= lines[-1]:
                logger.warning(
                    "Grid growth halted at %s=%s, bearing %s",
                    axis,
                    lines[-1],
                    forward,
                )
                break
            lines.append(line)
            self._check_line_count(lines, axis)
            inx += 1

        # Add lines outwards towards the smaller value
        inx = 1
        while lines[1] > lower:
            line = self._step(center, axis, backward, spacing * inx)
            if line is None or line >= lines[0]:
                logger.warning(
                    "Grid growth halted at %s=%s, bearing %s",
                    axis,
                    lines[0],
                    backward,
                )
                break
            lines.appendleft(line)
            self._check_line_count(lines, axis)
            inx += 1

        # A grid which stops short of the route would leave vertices uncovered
        if lines[-1] < upper or lines[0] > lower:
            bearing = forward if lines[-1] < upper else backward
            raise NumericDegeneracyError(
                f"Grid lines along the {axis} axis span {lines[0]} to "
                f"{lines[-1]}, but the route spans {lower} to {upper}; "
                f"unable to extend the grid on bearing {bearing}"
            )

        return list(lines)

    def build(self, vertices: List[GeoPoint], spacing: float) -> GridLineSet:
        """Generate the grid which is to be overlaid on a route

        Args:
            vertices (List[GeoPoint]): The vertices of the route
            spacing (float): The distance between grid lines, in km

        Raises:
            GridTooLargeError: If the grid would contain more cells than
              the configured maximum
            NumericDegeneracyError: If the grid cannot be extended to
              enclose the route

        Returns:
            GridLineSet: The latitude & longitude grid lines
        """
        bounds = GeoBounds.from_points(vertices)
        center = bounds.get_center()

        lats = self._build_axis(center, bounds, spacing, "lat")
        lngs = self._build_axis(center, bounds, spacing, "lng")
        grid = GridLineSet(lats=lats, lngs=lngs)

        if grid.no_cells > self.config.max_grid_cells:
            raise GridTooLargeError(
                f"Grid of {grid.shape[0]}x{grid.shape[1]} cells exceeds the "
                f"limit of {self.config.max_grid_cells}, try increasing the "
                "buffer distance"
            )

        logger.debug(
            "Built %dx%d grid around %s with %s km spacing",
            grid.shape[0],
            grid.shape[1],
            center,
            spacing,
        )
        return grid
