"""Merges the marked cells of a grid into rectangular boxes.

Two covers are produced from the same mark matrix and the one with fewer
boxes is kept. Boxes are only ever joined when their edges are exactly equal;
every edge is copied from the grid lines, never recalculated, so exact float
comparison is safe here. Introducing a tolerance, or deriving edges any
other way, would break the merge."""

import logging
from typing import List, Optional, Tuple

import numpy as np

from route_boxer.containers import GeoBounds, GridLineSet

logger = logging.getLogger(__name__)


class BoxMerger:
    """Class which converts a mark matrix into a list of bounding boxes. The
    output depends only on the grid and the marks provided.

    Rows and columns refer to the mark matrix, which is indexed as [x, y].
    A row therefore holds every cell in a single longitude band, ordered from
    south to north, while a column holds a single latitude band ordered from
    west to east."""

    def __init__(self, grid: GridLineSet, marks: np.ndarray):
        self.grid = grid
        self.marks = marks

    @staticmethod
    def _join_along_rows(boxes: List[GeoBounds], box: Optional[GeoBounds]):
        """Merge a box into an existing box from the previous row which spans
        the same latitudes, or append it to the list if there is none"""
        if box is None:
            return
        for existing in boxes:
            if (
                existing.north_east.lng == box.south_west.lng
                and existing.south_west.lat == box.south_west.lat
                and existing.north_east.lat == box.north_east.lat
            ):
                existing.extend(box.north_east)
                return
        boxes.append(box)

    @staticmethod
    def _join_along_columns(boxes: List[GeoBounds], box: Optional[GeoBounds]):
        """Merge a box into an existing box from the previous column which
        spans the same longitudes, or append it to the list if there is
        none"""
        if box is None:
            return
        for existing in boxes:
            if (
                existing.north_east.lat == box.south_west.lat
                and existing.south_west.lng == box.south_west.lng
                and existing.north_east.lng == box.north_east.lng
            ):
                existing.extend(box.north_east)
                return
        boxes.append(box)

    def merge_rows_first(self) -> List[GeoBounds]:
        """Combine the marked cells in each row into boxes running south to
        north, then combine boxes of the same height which sit side by side

        Returns:
            List[GeoBounds]: Boxes covering every marked cell
        """
        marks = self.marks.tolist()
        boxes: List[GeoBounds] = []
        for x, row in enumerate(marks):
            current = None
            for y, marked in enumerate(row):
                if marked:
                    cell = self.grid.get_cell_bounds(x, y)
                    if current is not None:
                        current.extend(cell.north_east)
                    else:
                        current = cell
                else:
                    self._join_along_rows(boxes, current)
                    current = None
            self._join_along_rows(boxes, current)
        return boxes

    def merge_columns_first(self) -> List[GeoBounds]:
        """Combine the marked cells in each column into boxes running west to
        east, then combine boxes of the same width which sit one above the
        other

        Returns:
            List[GeoBounds]: Boxes covering every marked cell
        """
        marks = self.marks.T.tolist()
        boxes: List[GeoBounds] = []
        for y, column in enumerate(marks):
            current = None
            for x, marked in enumerate(column):
                if marked:
                    cell = self.grid.get_cell_bounds(x, y)
                    if current is not None:
                        current.extend(cell.north_east)
                    else:
                        current = cell
                else:
                    self._join_along_columns(boxes, current)
                    current = None
            self._join_along_columns(boxes, current)
        return boxes

    def merge(self) -> Tuple[List[GeoBounds], List[GeoBounds]]:
        """Generate both candidate covers, as (rows first, columns first)"""
        return self.merge_rows_first(), self.merge_columns_first()

    def select(self) -> List[GeoBounds]:
        """Generate both candidate covers and return the one with the fewest
        boxes, preferring rows first in the event of a tie"""
        rows_first, columns_first = self.merge()
        logger.debug(
            "Rows first produced %d boxes, columns first produced %d",
            len(rows_first),
            len(columns_first),
        )
        if len(rows_first) <= len(columns_first):
            return rows_first
        return columns_first
