"""Generates bounding boxes which cover the area around a route"""

from route_boxer.boxer import RouteBoxer, compute_coverage_boxes
from route_boxer.containers import BoxerConfig, GeoBounds, GeoPoint
from route_boxer.exceptions import (
    GridTooLargeError,
    InvalidCoordinateError,
    InvalidDistanceError,
    NumericDegeneracyError,
    RouteBoxerError,
)

__all__ = [
    "BoxerConfig",
    "GeoBounds",
    "GeoPoint",
    "GridTooLargeError",
    "InvalidCoordinateError",
    "InvalidDistanceError",
    "NumericDegeneracyError",
    "RouteBoxer",
    "RouteBoxerError",
    "compute_coverage_boxes",
]
