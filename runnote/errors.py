"""Errors raised by the analysis core.

Classification never raises on bad activity data; it degrades to an Easy
result. Calculators raise when handed input that breaks their contract.
"""


class InvalidInputError(ValueError):
    """Activity or lap record that cannot be read at all."""


class NoWorkLapsError(ValueError):
    """Repetition structure requested for laps with no work intervals."""


class ZeroDistanceError(ZeroDivisionError):
    """Pace requested over a zero (or negative) distance."""
