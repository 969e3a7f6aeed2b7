"""Navigation along rhumb lines (paths of constant compass bearing) on a
spherical earth. Based on the latitude/longitude spherical geodesy formulae
published at http://www.movable-type.co.uk/scripts/latlong.html"""

import math
from typing import Iterable, Optional

from geopy.distance import distance

from route_boxer.containers import GeoPoint, PointLike, as_geo_point
from route_boxer.geo.conversions import to_bearing, to_deg, to_rad

EARTH_RADIUS_KM = 6371.0

# Below this change in latitude (radians), the ratio of the latitude change
# to the stretched (Mercator) latitude change is numerically unstable
_MIN_LAT_DELTA = 1e-10


def _stretched_lat_delta(lat_1: float, lat_2: float) -> float:
    """Difference between two latitudes (radians) on a Mercator projection.
    Returns NaN where the projection is undefined, i.e. at or beyond the
    poles."""
    try:
        return math.log(
            math.tan(lat_2 / 2 + math.pi / 4)
            / math.tan(lat_1 / 2 + math.pi / 4)
        )
    except (ValueError, ZeroDivisionError):
        return math.nan


def rhumb_destination(
    point: GeoPoint,
    bearing: float,
    dist: float,
    radius: float = EARTH_RADIUS_KM,
) -> Optional[GeoPoint]:
    """Travel a set distance from a starting point while holding a constant
    compass bearing

    Args:
        point (GeoPoint): The starting point
        bearing (float): The compass bearing to travel on, in degrees
        dist (float): The distance to travel, in the same units as radius
        radius (float, optional): The radius of the earth. Defaults to
          EARTH_RADIUS_KM.

    Returns:
        Optional[GeoPoint]: The destination point, with longitude normalised
          into (-180, 180]. None is returned if the journey cannot be
          computed, which happens when it passes too close to a pole.
    """
    ang_dist = dist / radius
    lat_1 = to_rad(point.lat)
    lng_1 = to_rad(point.lng)
    brng = to_rad(bearing)

    lat_2 = lat_1 + ang_dist * math.cos(brng)
    lat_delta = lat_2 - lat_1
    stretched_delta = _stretched_lat_delta(lat_1, lat_2)

    # East-west travel, use the cosine of the start latitude instead
    if abs(lat_delta) > _MIN_LAT_DELTA:
        stretch = lat_delta / stretched_delta if stretched_delta else math.nan
    else:
        stretch = math.cos(lat_1)
    if not stretch:
        return None
    lng_delta = ang_dist * math.sin(brng) / stretch

    # Going past the pole
    if abs(lat_2) > math.pi / 2:
        lat_2 = math.pi - lat_2 if lat_2 > 0 else -(math.pi - lat_2)

    lng_2 = (lng_1 + lng_delta + math.pi) % (2 * math.pi) - math.pi
    if lng_2 == -math.pi:
        lng_2 = math.pi

    if not (math.isfinite(lat_2) and math.isfinite(lng_2)):
        return None
    return GeoPoint(to_deg(lat_2), to_deg(lng_2))


def rhumb_bearing(start: GeoPoint, end: GeoPoint) -> float:
    """Calculate the constant compass bearing which leads from one point to
    another. Where the longitude difference exceeds 180 degrees, the bearing
    of the shorter path across the antimeridian is returned.

    Args:
        start (GeoPoint): The point to travel from
        end (GeoPoint): The point to travel to

    Returns:
        float: The bearing in degrees, in the range [0, 360)
    """
    lng_delta = to_rad(end.lng - start.lng)
    stretched_delta = _stretched_lat_delta(to_rad(start.lat), to_rad(end.lat))
    if abs(lng_delta) > math.pi:
        if lng_delta > 0:
            lng_delta = -(2 * math.pi - lng_delta)
        else:
            lng_delta = 2 * math.pi + lng_delta
    return to_bearing(math.atan2(lng_delta, stretched_delta))


def rhumb_distance_to_latitude(
    start: GeoPoint,
    bearing: float,
    target_lat: float,
    radius: float = EARTH_RADIUS_KM,
) -> float:
    """Calculate how far a rhumb line must be followed from a starting point
    before it reaches a given latitude

    Args:
        start (GeoPoint): The start of the rhumb line
        bearing (float): The bearing of the rhumb line, in degrees
        target_lat (float): The latitude to be reached, in degrees
        radius (float, optional): The radius of the earth. Defaults to
          EARTH_RADIUS_KM.

    Returns:
        float: The distance to travel, in the same units as radius
    """
    lat_delta = to_rad(target_lat) - to_rad(start.lat)
    return radius * (lat_delta / math.cos(to_rad(bearing)))


def route_length(points: Iterable[PointLike]) -> float:
    """Total geodesic length of a route in kilometres, used for diagnostics
    only"""
    total = 0.0
    last = None
    for point in points:
        point = as_geo_point(point)
        if last is not None:
            total += distance(last.to_tuple(), point.to_tuple()).km
        last = point
    return total
