"""Numeric helpers shared by the serving size services."""

import math


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves rounded up."""
    return math.floor(value + 0.5)


def round_tenth(value: float) -> float:
    """Round to one decimal place with halves rounded up."""
    return round_half_up(value * 10) / 10


def format_grams(value: float) -> str:
    """Format a gram weight in full, without a trailing ``.0``."""
    number = float(value)
    if number.is_integer():
        return str(int(number))
    return repr(number)
