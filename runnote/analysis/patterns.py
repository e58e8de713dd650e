"""Detect the shortest repeating unit in a sequence of rep distances.

Used to compress a long list of work (or recovery) distances into either
"N x 200m" (a unit of length 1) or a ladder such as "3 x (400m, 200m, 200m)".
"""

from runnote.models import RepeatingPattern

MIN_REPETITIONS = 2


def find_repeating_pattern(values) -> RepeatingPattern | None:
    """Find the shortest unit that repeats across the whole sequence.

    Unit lengths are tried from 1 up to half the sequence length. Every full
    chunk must equal the unit. A shorter trailing chunk (an unfinished last
    repetition) must match the start of the unit and is not counted.

    Returns:
        RepeatingPattern with at least two full repetitions, or None.
    """
    values = list(values)
    n = len(values)

    for length in range(1, n // 2 + 1):
        unit = values[:length]
        full_sets = _count_repetitions(values, unit)
        if full_sets is not None and full_sets >= MIN_REPETITIONS:
            return RepeatingPattern(pattern=tuple(unit), sets=full_sets)

    return None


def _count_repetitions(values: list, unit: list) -> int | None:
    """Count full repetitions of unit in values, or None if it doesn't tile."""
    length = len(unit)
    full_sets = 0
    for start in range(0, len(values), length):
        chunk = values[start:start + length]
        if len(chunk) == length:
            if chunk != unit:
                return None
            full_sets += 1
        elif chunk != unit[:len(chunk)]:
            # Partial last repetition must still follow the unit
            return None
    return full_sets
