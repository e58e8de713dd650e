"""Render workout analysis results as a one-line summary, a title, and the
description update written back to the activity.
"""

import re

from runnote.analysis.distances import round_half_up
from runnote.models import (
    Activity, ActivityUpdate, Ladder, RepDistance, RepetitionMetrics, WorkoutAnalysisResult,
    WorkoutType,
)

SUMMARY_MARKER = "--from RunNote"

_MARKER_RE = re.compile(r"\s*--\s*from\s*RunNote\s*", re.IGNORECASE)
_ENDS_WITH_MARKER_RE = re.compile(r"\s*--\s*from\s*RunNote\s*$", re.IGNORECASE)


def format_pace(seconds_per_mile: float) -> str:
    """Format pace as M:SS per mile (e.g. '6:38'), seconds rounded."""
    total = int(round_half_up(seconds_per_mile))
    minutes, secs = divmod(total, 60)
    return f"{minutes}:{secs:02d}"


def format_distance_miles(miles: float) -> str:
    """Whole miles from 10 up, one decimal below."""
    if miles >= 10:
        return str(int(round_half_up(miles)))
    return f"{round_half_up(miles, 0.1):.1f}"


def _format_interval_miles(miles: float) -> str:
    """Interval length: '1' for a mile rep, '0.6' for a 1km rep."""
    rounded = round_half_up(miles, 0.1)
    if abs(rounded - round(rounded)) < 1e-9:
        return str(int(round(rounded)))
    return f"{rounded:.1f}"


def _first_distance(value: RepDistance) -> int:
    if isinstance(value, Ladder):
        return value.sequence[0]
    return value.distance


def _format_repetition(rep: RepetitionMetrics) -> str:
    between = rep.between_set_recovery_distance_meters
    recovery = _first_distance(rep.recovery_distance_meters)

    if isinstance(rep.work_distance_meters, Ladder):
        pattern = ", ".join(f"{d}m" for d in rep.work_distance_meters.sequence)
        line = f"{rep.sets} x ({pattern}) R w/ equal jog recovery"
        if rep.sets > 1 and between > 0:
            line += f" w/{between}m jog"
        return line

    work = rep.work_distance_meters.distance
    if rep.sets == 1:
        return f"{rep.reps_per_set} x {work}m R w/{recovery}m jog"

    set_break = between if between > 0 else recovery
    return (f"{rep.sets} x({rep.reps_per_set} x {work}m R w/{recovery}m jog)"
            f" w/{set_break}m jog")


def format_summary(result: WorkoutAnalysisResult) -> str:
    """One-line description of a classified workout.

    Examples:
        'E 11 mi @ 8:59/mi (HR 130)'
        'T 3.1 mi @ avg 6:38/mi'
        'T 3 x 1 mi @ 6:24, 6:24, 6:23'
        '2 x(8 x 200m R w/200m jog) w/800m jog'
    """
    code = result.type.code

    if result.repetition_metrics:
        return _format_repetition(result.repetition_metrics)

    if result.interval_metrics:
        im = result.interval_metrics
        paces = ", ".join(format_pace(p) for p in im.individual_paces_seconds)
        distance = _format_interval_miles(im.distance_per_interval_miles)
        return f"{code} {im.interval_count} x {distance} mi @ {paces}"

    if result.metrics:
        m = result.metrics
        distance = format_distance_miles(m.distance_miles)
        pace = format_pace(m.pace_seconds_per_mile)
        if result.type is WorkoutType.CONTINUOUS_TEMPO:
            return f"{code} {distance} mi @ avg {pace}/mi"
        line = f"{code} {distance} mi @ {pace}/mi"
        if m.average_heartrate is not None:
            line += f" (HR {m.average_heartrate})"
        return line

    return f"{code} run"


def generate_title(workout_type: WorkoutType) -> str:
    return workout_type.title


def apply_summary_to_description(existing: str | None, summary: str,
                                 marker: str = SUMMARY_MARKER) -> str:
    """Put exactly one summary line at the top of an activity description.

    Any earlier summary line (one ending with the marker, case and spacing
    ignored) is dropped; all other non-empty lines keep their order.
    """
    desc = (existing or "").replace("\r\n", "\n")

    summary_line = re.sub(r"\s*\n+\s*", " ", summary).strip()
    summary_line = _MARKER_RE.sub(" ", summary_line).strip()
    summary_line = re.sub(r"\s{2,}", " ", summary_line)
    top = f"{summary_line} {marker}"

    kept = [
        line.rstrip() for line in desc.split("\n")
        if line.strip() and not _ENDS_WITH_MARKER_RE.search(line.strip())
    ]
    if not kept:
        return f"{top}\n\n"
    return f"{top}\n\n" + "\n".join(kept)


def build_activity_update(activity: Activity, result: WorkoutAnalysisResult) -> ActivityUpdate:
    """Title and description to write back to the tracking service."""
    summary = format_summary(result)
    return ActivityUpdate(
        name=generate_title(result.type),
        description=apply_summary_to_description(activity.description, summary),
    )
