"""
Check that grid lines are laid out correctly around a route
"""
import logging
import math

import pytest
from pytest import approx

from route_boxer.containers import BoxerConfig, GeoPoint
from route_boxer.exceptions import GridTooLargeError, NumericDegeneracyError
from route_boxer.grid.grid_builder import GridBuilder

sample_config = BoxerConfig()
sample = GridBuilder(sample_config)

sample_route = [
    GeoPoint(10.0, 10.0),
    GeoPoint(11.0, 12.0),
    GeoPoint(12.0, 11.0),
    GeoPoint(13.0, 14.0),
    GeoPoint(14.0, 13.0),
]


class TestBuild:
    """Check the lines generated for a typical route"""

    grid = sample.build(sample_route, 5.0)

    def test_lines_ascending(self):
        assert all(a < b for a, b in zip(self.grid.lats, self.grid.lats[1:]))
        assert all(a < b for a, b in zip(self.grid.lngs, self.grid.lngs[1:]))

    def test_center_is_a_grid_line(self):
        """The grid should be centred on the middle of the route's bounding
        box"""
        assert 12.0 in self.grid.lats
        assert 12.0 in self.grid.lngs

    def test_lines_extend_past_route(self):
        """At least one full cell should lie beyond each edge of the route"""
        assert self.grid.lats[1] <= 10.0
        assert self.grid.lats[-2] >= 14.0
        assert self.grid.lngs[1] <= 10.0
        assert self.grid.lngs[-2] >= 14.0

    def test_latitude_spacing(self):
        """Lines of latitude should be spaced by the buffer distance"""
        # Arrange
        target = math.degrees(5.0 / sample_config.earth_radius_km)

        # Act
        spacings = [b - a for a, b in zip(self.grid.lats, self.grid.lats[1:])]

        # Assert
        assert spacings == approx([target] * len(spacings))

    def test_shape(self):
        assert self.grid.shape == (
            len(self.grid.lngs) - 1,
            len(self.grid.lats) - 1,
        )


def test_degenerate_route():
    """A route which never moves should still produce a usable grid"""
    # Arrange
    route = [GeoPoint(10.0, 10.0), GeoPoint(10.0, 10.0)]

    # Act
    result = sample.build(route, 5.0)

    # Assert
    assert len(result.lats) >= 2
    assert len(result.lngs) >= 2
    assert result.lats[0] < 10.0 < result.lats[-1]
    assert result.lngs[0] < 10.0 < result.lngs[-1]


def test_grid_too_large():
    """A tiny buffer around a long route should be rejected before any
    memory is allocated for the grid"""
    # Arrange
    route = [GeoPoint(0.0, 0.0), GeoPoint(1.0, 1.0)]
    builder = GridBuilder(BoxerConfig(max_grid_cells=100))

    # Act, Assert
    with pytest.raises(GridTooLargeError):
        builder.build(route, 5.0)


def test_growth_halted_near_pole(caplog):
    """Grid lines which would pass the pole should not be added, but the
    rest of the grid should still be built"""
    # Arrange
    route = [GeoPoint(89.0, 0.0), GeoPoint(89.5, 0.0)]

    # Act
    with caplog.at_level(logging.WARNING):
        result = sample.build(route, 50.0)

    # Assert
    assert all(math.isfinite(lat) for lat in result.lats)
    assert result.lats[-1] < 90.0
    assert result.lats[-1] > 89.5
    assert "Grid growth halted" in caplog.text


def test_no_room_at_pole():
    """If not even one cell fits between the route and the pole, the grid
    cannot be built"""
    # Arrange
    route = [GeoPoint(89.99, 0.0), GeoPoint(89.98, 1.0)]

    # Act, Assert
    with pytest.raises(NumericDegeneracyError):
        sample.build(route, 5.0)


def test_growth_cannot_reach_route():
    """If growth halts before the grid encloses the route, the grid would
    leave vertices uncovered and must not be returned"""
    # Arrange
    route = [GeoPoint(-89.99, 0.0), GeoPoint(-89.9, 5.0)]

    # Act, Assert
    with pytest.raises(NumericDegeneracyError, match="bearing 180.0"):
        sample.build(route, 5.0)
