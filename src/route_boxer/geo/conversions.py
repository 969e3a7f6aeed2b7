"""Stateless helpers for moving between degrees, radians and compass
bearings, plus number formatting for display purposes."""

import math


def to_rad(degrees: float) -> float:
    """Convert an angle in degrees to radians"""
    return degrees * math.pi / 180


def to_deg(radians: float) -> float:
    """Convert an angle in radians to degrees"""
    return radians * 180 / math.pi


def to_bearing(radians: float) -> float:
    """Convert an angle in radians to a compass bearing in degrees, in the
    range [0, 360)"""
    return (to_deg(radians) + 360) % 360


def format_num(num: float, digits: int = 5) -> float:
    """Round a number to the requested number of decimal places, with halves
    rounded towards positive infinity

    Args:
        num (float): The number to be rounded
        digits (int, optional): The number of decimal places to keep.
          Defaults to 5.

    Returns:
        float: The rounded number
    """
    if not math.isfinite(num):
        return num
    pow_ = 10 ** (digits if digits is not None else 5)
    return math.floor(num * pow_ + 0.5) / pow_
