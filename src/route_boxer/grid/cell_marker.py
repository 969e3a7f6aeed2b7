"""Identifies the cells of a grid which a route passes through, marking each
of them (and their nearest neighbours) for inclusion in the final boxes."""

import logging
from typing import List, Tuple

import numpy as np

from route_boxer.containers import BoxerConfig, GeoPoint, GridLineSet
from route_boxer.exceptions import NumericDegeneracyError
from route_boxer.geo.rhumb import (
    rhumb_bearing,
    rhumb_destination,
    rhumb_distance_to_latitude,
)

logger = logging.getLogger(__name__)

Cell = Tuple[int, int]


def walk_lines(
    lines: List[float], value: float, start: int, ascending: bool
) -> int:
    """Starting from a known cell, walk along a single axis of the grid
    until the cell containing value is reached. The walk only ever moves in
    one direction, so this is much cheaper than a full scan when value is
    known to be close to the starting cell.

    Args:
        lines (List[float]): The grid lines for this axis, in ascending order
        value (float): The lat or lng to be located
        start (int): The index of the cell to start walking from
        ascending (bool): Whether value is larger than the value held by
          the starting cell

    Returns:
        int: The index of the cell containing value
    """
    inx = start
    last_cell = len(lines) - 2
    if ascending:
        while inx < last_cell and lines[inx + 1] < value:
            inx += 1
    else:
        while inx > 0 and lines[inx] > value:
            inx -= 1
    return inx


class CellMarker:
    """Class which rasterizes a route onto a grid. Each instance owns its own
    mark matrix, so a fresh instance must be created for every route.

    The mark matrix is indexed as [x, y], x being the longitude band and y
    the latitude band of each cell."""

    def __init__(self, grid: GridLineSet, config: BoxerConfig):
        self.grid = grid
        self.config = config
        self.marks = np.zeros(grid.shape, dtype=bool)

    # Cell location ###########################################################
    def get_cell_coords(self, point: GeoPoint) -> Cell:
        """Find the cell a point is in by brute force iteration over the grid.
        Points outside of the grid are placed in the nearest edge cell."""
        max_x, max_y = self.grid.shape

        x = 0
        while x < len(self.grid.lngs) and self.grid.lngs[x] < point.lng:
            x += 1
        y = 0
        while y < len(self.grid.lats) and self.grid.lats[y] < point.lat:
            y += 1

        x = min(max(x - 1, 0), max_x - 1)
        y = min(max(y - 1, 0), max_y - 1)
        return x, y

    def get_cell_coords_from_hint(
        self, point: GeoPoint, hint_point: GeoPoint, hint: Cell
    ) -> Cell:
        """Find the cell a point is in, based on the known cell of a nearby
        point

        Args:
            point (GeoPoint): The point to locate in the grid
            hint_point (GeoPoint): A nearby point whose cell is known
            hint (Cell): The cell containing hint_point

        Returns:
            Cell: The cell containing point
        """
        x = walk_lines(
            self.grid.lngs, point.lng, hint[0], point.lng > hint_point.lng
        )
        y = walk_lines(
            self.grid.lats, point.lat, hint[1], point.lat > hint_point.lat
        )
        return x, y

    # Marking #################################################################
    def mark_cell(self, cell: Cell):
        """Mark a cell and its 8 immediate neighbours for inclusion in the
        boxes. Neighbours outside of the grid are ignored."""
        x, y = cell
        self.marks[max(x - 1, 0) : x + 2, max(y - 1, 0) : y + 2] = True

    def fill_in_grid_squares(self, start_x: int, end_x: int, y: int):
        """Mark all cells in a row of the grid which lie between two
        columns, inclusive of both"""
        for x in range(min(start_x, end_x), max(start_x, end_x) + 1):
            self.mark_cell((x, y))

    # Segment rasterization ###################################################
    def _get_grid_intersect(
        self, start: GeoPoint, bearing: float, grid_line_lat: float
    ) -> GeoPoint:
        """Find the point at which a path segment crosses a line of latitude"""
        dist = rhumb_distance_to_latitude(
            start, bearing, grid_line_lat, radius=self.config.earth_radius_km
        )
        edge_point = rhumb_destination(
            start, bearing, dist, radius=self.config.earth_radius_km
        )
        if edge_point is None:
            raise NumericDegeneracyError(
                f"Unable to find where the segment from {start} on bearing "
                f"{bearing:.3f} crosses latitude {grid_line_lat}"
            )
        return edge_point

    def get_grid_intersects(
        self, start: GeoPoint, end: GeoPoint, start_xy: Cell, end_xy: Cell
    ):
        """Mark the grid squares that a path segment between two vertices
        intersects with. For every latitude grid line crossed by the segment,
        the point of intersection is located, and all cells in the row
        between it and the previous intersection (or the start) are filled
        in.

        Args:
            start (GeoPoint): The vertex at the start of the segment
            end (GeoPoint): The vertex at the end of the segment
            start_xy (Cell): The cell containing the start vertex
            end_xy (Cell): The cell containing the end vertex
        """
        bearing = rhumb_bearing(start, end)

        hint = start
        hint_xy = start_xy

        if end.lat > start.lat:
            # Heading north, row y lies below line y + 1
            rows = range(start_xy[1] + 1, end_xy[1] + 1)
            row_offset = -1
        else:
            # Heading south, row y lies above line y
            rows = range(start_xy[1], end_xy[1], -1)
            row_offset = 0

        for inx in rows:
            edge_point = self._get_grid_intersect(
                start, bearing, self.grid.lats[inx]
            )
            edge_xy = self.get_cell_coords_from_hint(edge_point, hint, hint_xy)
            self.fill_in_grid_squares(hint_xy[0], edge_xy[0], inx + row_offset)
            hint = edge_point
            hint_xy = edge_xy

        self.fill_in_grid_squares(hint_xy[0], end_xy[0], end_xy[1])

    def mark_route(self, vertices: List[GeoPoint]) -> np.ndarray:
        """Find all of the cells in the grid that a route intersects, and
        mark them (and their neighbours) for inclusion in the boxes

        Args:
            vertices (List[GeoPoint]): The vertices of the route

        Returns:
            np.ndarray: The mark matrix, indexed as [x, y]
        """
        hint_xy = self.get_cell_coords(vertices[0])
        self.mark_cell(hint_xy)

        for prev, vertex in zip(vertices, vertices[1:]):
            grid_xy = self.get_cell_coords_from_hint(vertex, prev, hint_xy)
            x_step = abs(hint_xy[0] - grid_xy[0])
            y_step = abs(hint_xy[1] - grid_xy[1])
            if x_step + y_step == 0:
                # Same cell as the previous vertex, already marked
                continue
            if x_step + y_step == 1:
                # Shares an edge with the previous cell
                self.mark_cell(grid_xy)
            else:
                # The segment passes through other cells on its way here
                self.get_grid_intersects(prev, vertex, hint_xy, grid_xy)
            hint_xy = grid_xy

        logger.debug(
            "Marked %d of %d cells for %d vertices",
            int(self.marks.sum()),
            self.marks.size,
            len(vertices),
        )
        return self.marks
