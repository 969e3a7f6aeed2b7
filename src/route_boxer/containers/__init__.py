import math
from dataclasses import dataclass
from typing import Iterable, List, Sequence, Tuple, Union

from route_boxer.exceptions import InvalidCoordinateError
from route_boxer.geo.conversions import format_num


def _to_coordinate(value, name: str) -> float:
    """Coerce a single latitude or longitude to a float, rejecting anything
    which is not numeric"""
    try:
        coord = float(value)
    except (TypeError, ValueError) as exc:
        raise InvalidCoordinateError(
            f"Invalid {name} supplied: {value!r}"
        ) from exc
    if math.isnan(coord):
        raise InvalidCoordinateError(f"Invalid {name} supplied: {value!r}")
    return coord


@dataclass(frozen=True)
class GeoPoint:
    """A single geographical location. No wrapping or clamping is applied
    to the supplied values.

    Args:
        lat (float): Latitude, in degrees
        lng (float): Longitude, in degrees

    Raises:
        InvalidCoordinateError: If either value is not numeric"""

    lat: float
    lng: float

    def __post_init__(self):
        object.__setattr__(self, "lat", _to_coordinate(self.lat, "latitude"))
        object.__setattr__(self, "lng", _to_coordinate(self.lng, "longitude"))

    @classmethod
    def from_sequence(cls, pair: Sequence) -> "GeoPoint":
        """Build a point from a (lat, lng) pair"""
        try:
            lat, lng = pair
        except (TypeError, ValueError) as exc:
            raise InvalidCoordinateError(
                f"Expected a (lat, lng) pair, got {pair!r}"
            ) from exc
        return cls(lat, lng)

    def equals(self, other: "GeoPoint", max_margin: float = 1.0e-9) -> bool:
        """Check whether another point sits at the same position, within a
        small margin of error"""
        margin = max(abs(self.lat - other.lat), abs(self.lng - other.lng))
        return margin <= max_margin

    def to_tuple(self) -> Tuple[float, float]:
        return self.lat, self.lng

    def to_string(self, precision: int = 5) -> str:
        return (
            f"LatLng({format_num(self.lat, precision)}, "
            f"{format_num(self.lng, precision)})"
        )

    def __str__(self) -> str:
        return self.to_string()


PointLike = Union[GeoPoint, Sequence[float]]


def as_geo_point(point: PointLike) -> GeoPoint:
    """Convenience function, accepts either a GeoPoint or a (lat, lng) pair"""
    if isinstance(point, GeoPoint):
        return point
    return GeoPoint.from_sequence(point)


@dataclass
class GeoBounds:
    """An axis-aligned rectangle on the surface of the earth, which can be
    widened in place to take in additional points. The corners are
    normalised on creation, so the order in which they are supplied does
    not matter.

    Args:
        south_west (GeoPoint): The south-west corner
        north_east (GeoPoint): The north-east corner"""

    south_west: GeoPoint
    north_east: GeoPoint

    def __post_init__(self):
        corner_1 = as_geo_point(self.south_west)
        corner_2 = as_geo_point(self.north_east)
        self.south_west = GeoPoint(
            min(corner_1.lat, corner_2.lat), min(corner_1.lng, corner_2.lng)
        )
        self.north_east = GeoPoint(
            max(corner_1.lat, corner_2.lat), max(corner_1.lng, corner_2.lng)
        )

    @classmethod
    def from_points(cls, points: Iterable[PointLike]) -> "GeoBounds":
        """Generate the bounding box which encompasses every provided point

        Args:
            points (Iterable[PointLike]): The points to be enclosed

        Raises:
            ValueError: If no points are provided

        Returns:
            GeoBounds: The smallest box containing all of the points
        """
        bounds = None
        for point in points:
            if bounds is None:
                point = as_geo_point(point)
                bounds = cls(point, point)
            else:
                bounds.extend(point)
        if bounds is None:
            raise ValueError("Unable to create bounds from an empty sequence")
        return bounds

    def extend(self, obj: Union["GeoBounds", PointLike]) -> "GeoBounds":
        """Widen these bounds so that they contain the given point or bounds

        Args:
            obj (Union[GeoBounds, PointLike]): The point or bounds to take in

        Returns:
            GeoBounds: These bounds, after modification
        """
        if isinstance(obj, GeoBounds):
            sw2, ne2 = obj.south_west, obj.north_east
        else:
            sw2 = ne2 = as_geo_point(obj)

        self.south_west = GeoPoint(
            min(sw2.lat, self.south_west.lat),
            min(sw2.lng, self.south_west.lng),
        )
        self.north_east = GeoPoint(
            max(ne2.lat, self.north_east.lat),
            max(ne2.lng, self.north_east.lng),
        )
        return self

    def get_center(self) -> GeoPoint:
        return GeoPoint(
            (self.south_west.lat + self.north_east.lat) / 2,
            (self.south_west.lng + self.north_east.lng) / 2,
        )

    def contains(self, obj: Union["GeoBounds", PointLike]) -> bool:
        """Check whether a point or another set of bounds lies entirely
        within these bounds. Edges are treated as inside."""
        if isinstance(obj, GeoBounds):
            sw2, ne2 = obj.south_west, obj.north_east
        else:
            sw2 = ne2 = as_geo_point(obj)

        return (
            sw2.lat >= self.south_west.lat
            and ne2.lat <= self.north_east.lat
            and sw2.lng >= self.south_west.lng
            and ne2.lng <= self.north_east.lng
        )

    def intersects(self, other: "GeoBounds") -> bool:
        """Check whether two sets of bounds share at least one point"""
        lat_overlap = (
            other.north_east.lat >= self.south_west.lat
            and other.south_west.lat <= self.north_east.lat
        )
        lng_overlap = (
            other.north_east.lng >= self.south_west.lng
            and other.south_west.lng <= self.north_east.lng
        )
        return lat_overlap and lng_overlap

    def pad(self, buffer_ratio: float) -> "GeoBounds":
        """Create a larger copy of these bounds, grown by a fraction of their
        height/width in each direction"""
        height_buffer = (
            abs(self.south_west.lat - self.north_east.lat) * buffer_ratio
        )
        width_buffer = (
            abs(self.south_west.lng - self.north_east.lng) * buffer_ratio
        )

        return GeoBounds(
            GeoPoint(
                self.south_west.lat - height_buffer,
                self.south_west.lng - width_buffer,
            ),
            GeoPoint(
                self.north_east.lat + height_buffer,
                self.north_east.lng + width_buffer,
            ),
        )

    def to_list(self) -> List[List[float]]:
        """Render as [[south, west], [north, east]]"""
        return [
            [self.south_west.lat, self.south_west.lng],
            [self.north_east.lat, self.north_east.lng],
        ]

    def __str__(self) -> str:
        return f"LatLngBounds({self.south_west}, {self.north_east})"


@dataclass
class GridLineSet:
    """The grid which is overlaid on a route. Cell (x, y) is bounded by
    longitude lines x and x + 1, and latitude lines y and y + 1.

    Args:
        lats (List[float]): Latitude of each east-west grid line, ascending
        lngs (List[float]): Longitude of each north-south grid line,
          ascending"""

    lats: List[float]
    lngs: List[float]

    @property
    def shape(self) -> Tuple[int, int]:
        """The number of cells along each axis, as (x, y)"""
        return len(self.lngs) - 1, len(self.lats) - 1

    @property
    def no_cells(self) -> int:
        no_x, no_y = self.shape
        return no_x * no_y

    def get_cell_bounds(self, x: int, y: int) -> GeoBounds:
        """Fetch the physical boundaries of a single grid cell"""
        return GeoBounds(
            GeoPoint(self.lats[y], self.lngs[x]),
            GeoPoint(self.lats[y + 1], self.lngs[x + 1]),
        )


@dataclass(frozen=True)
class BoxerConfig:
    """Contains tunable options for route boxing

    Args:
        earth_radius_km (float): Radius of the sphere used for rhumb line
          navigation
        max_grid_cells (int): The largest grid which may be overlaid on a
          route. Reduce this to limit memory usage when boxing long routes
          with a small buffer distance.
        default_buffer_m (float): The buffer distance used by
          compute_coverage_boxes when none is provided, in metres
    """

    earth_radius_km: float = 6371.0
    max_grid_cells: int = 25_000_000
    default_buffer_m: float = 20.0
