"""Errors raised while boxing a route. All of them derive from
RouteBoxerError, so callers can catch the whole family at once."""


class RouteBoxerError(Exception):
    """Base class for every error raised by this package"""


class InvalidCoordinateError(RouteBoxerError, ValueError):
    """A latitude or longitude could not be interpreted as a finite number"""


class InvalidDistanceError(RouteBoxerError, ValueError):
    """The buffer distance was not a positive, finite number"""


class NumericDegeneracyError(RouteBoxerError):
    """Rhumb line navigation produced a non-finite result where a valid
    point was required, typically because the route runs too close to a
    pole"""


class GridTooLargeError(RouteBoxerError):
    """The grid overlaid on the route would hold more cells than the
    configured limit allows"""
