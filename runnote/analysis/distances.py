"""Snap GPS lap distances to conventional track and road distances."""

import math

METERS_PER_MILE = 1609.344

STANDARD_DISTANCES_M = (100, 200, 300, 400, 600, 800, 1000, 1200, 1600)

# Relative error under which a distance snaps to the closest standard.
SNAP_TOLERANCE = 0.15


def round_half_up(value: float, step: float = 1) -> float:
    """Round to the nearest multiple of step, halves away from zero."""
    return math.floor(value / step + 0.5) * step


def round_to_standard(meters: float) -> int:
    """Round a distance to the closest standard distance, else to the nearest 100m.

    Ties between two standards go to the shorter one (first in ladder order).
    Zero and negative distances return 0.
    """
    if meters <= 0:
        return 0

    closest = STANDARD_DISTANCES_M[0]
    min_diff = abs(meters - closest)
    for std in STANDARD_DISTANCES_M:
        diff = abs(meters - std)
        if diff < min_diff:
            min_diff = diff
            closest = std

    if min_diff / meters < SNAP_TOLERANCE:
        return closest
    return int(round_half_up(meters, 100))


def meters_to_miles(meters: float) -> float:
    return meters / METERS_PER_MILE
