"""Metric calculators for each workout shape.

- run_metrics: one continuous effort (easy, long, tempo block totals)
- tempo_block_metrics: contiguous tempo laps summed into one effort
- interval_metrics: per-rep paces for tempo/VO2max intervals
- repetition_metrics: sets, reps and rep/recovery distances for R workouts
"""

from runnote.analysis.distances import meters_to_miles, round_half_up, round_to_standard
from runnote.analysis.lap_roles import classify_laps, laps_with_role
from runnote.analysis.patterns import find_repeating_pattern
from runnote.config import ClassificationSettings
from runnote.errors import NoWorkLapsError, ZeroDistanceError
from runnote.models import (
    Activity, IntervalMetrics, LapRole, Ladder, RepetitionMetrics, RunMetrics, Uniform,
    WorkoutAnalysisResult, WorkoutType,
)


def _round_hr(hr: float | None) -> int | None:
    return int(round_half_up(hr)) if hr is not None else None


def _mean_hr(laps) -> int | None:
    values = [lap.average_heartrate for lap in laps if lap.average_heartrate is not None]
    if not values:
        return None
    return _round_hr(sum(values) / len(values))


def pace_seconds_per_mile(distance_m: float, time_s: float) -> float:
    """Seconds per mile; raises ZeroDistanceError for non-positive distance."""
    miles = meters_to_miles(distance_m)
    if miles <= 0:
        raise ZeroDistanceError(f"Cannot compute pace over {distance_m} m")
    return time_s / miles


def run_metrics(distance_m: float, time_s: float, hr: float | None) -> RunMetrics:
    """Distance, pace and HR for one continuous effort."""
    return RunMetrics(
        distance_miles=meters_to_miles(distance_m),
        pace_seconds_per_mile=pace_seconds_per_mile(distance_m, time_s),
        average_heartrate=_round_hr(hr),
    )


def tempo_block_metrics(laps) -> RunMetrics:
    """Totals over a contiguous tempo block; HR is the mean of lap HRs."""
    laps = list(laps)
    if not laps:
        raise ValueError("tempo_block_metrics: no laps provided")
    distance = sum(lap.distance for lap in laps)
    time_s = sum(lap.moving_time for lap in laps)
    metrics = run_metrics(distance, time_s, None)
    metrics.average_heartrate = _mean_hr(laps)
    return metrics


def interval_metrics(work_laps) -> IntervalMetrics:
    """Per-interval paces (not derived from the aggregate) plus mean distance and HR."""
    work_laps = list(work_laps)
    if not work_laps:
        raise ValueError("interval_metrics: no work laps provided")

    paces = [pace_seconds_per_mile(lap.distance, lap.moving_time) for lap in work_laps]
    avg_distance = sum(lap.distance for lap in work_laps) / len(work_laps)

    return IntervalMetrics(
        interval_count=len(work_laps),
        distance_per_interval_miles=meters_to_miles(avg_distance),
        individual_paces_seconds=paces,
        average_heartrate=_mean_hr(work_laps),
    )


def repetition_metrics(laps, settings: ClassificationSettings | None = None) -> RepetitionMetrics:
    """Work out the set/rep structure of a repetition workout.

    Steps:
    1. Classify laps into work / recovery / between-set recovery.
    2. Round every work and recovery distance to a standard distance.
    3. Look for a repeating unit in the work distances: a unit of one
       distance means uniform reps, a longer unit is a ladder.
    4. Recovery distance: a ladder if the recoveries repeat in a longer
       unit, else their mean, else the work distance.

    Raises:
        NoWorkLapsError: No lap qualifies as a work rep.
    """
    laps = list(laps)
    roles = classify_laps(laps, settings)

    work = [round_to_standard(lap.distance) for lap in laps_with_role(laps, roles, LapRole.WORK)]
    recovery = [round_to_standard(lap.distance) for lap in laps_with_role(laps, roles, LapRole.RECOVERY)]
    set_breaks = laps_with_role(laps, roles, LapRole.BETWEEN_SET_RECOVERY)

    if not work:
        raise NoWorkLapsError(
            "No work laps found; work reps must be 180-600m and faster than "
            f"{(settings or ClassificationSettings()).work_min_speed} m/s"
        )

    between_set = round_to_standard(set_breaks[0].distance) if set_breaks else 0
    ladder_pattern = None

    work_pattern = find_repeating_pattern(work)
    if work_pattern and len(work_pattern.pattern) == 1:
        work_distance = Uniform(work_pattern.pattern[0])
        if set_breaks:
            sets = len(set_breaks) + 1
            reps_per_set = int(round_half_up(len(work) / sets))
        else:
            sets = 1
            reps_per_set = len(work)
    elif work_pattern:
        ladder_pattern = work_pattern.pattern
        work_distance = Ladder(work_pattern.pattern)
        reps_per_set = len(work_pattern.pattern)
        sets = len(set_breaks) + 1 if set_breaks else work_pattern.sets
    else:
        # No clean repetition: describe the reps by their mean distance
        work_distance = Uniform(round_to_standard(sum(work) / len(work)))
        sets = len(set_breaks) + 1
        reps_per_set = int(round_half_up(len(work) / sets))

    recovery_pattern = find_repeating_pattern(recovery)
    if recovery_pattern and len(recovery_pattern.pattern) > 1:
        recovery_distance = Ladder(recovery_pattern.pattern)
    elif recovery:
        recovery_distance = Uniform(round_to_standard(sum(recovery) / len(recovery)))
    elif isinstance(work_distance, Ladder):
        recovery_distance = Uniform(work_distance.sequence[0])
    else:
        recovery_distance = Uniform(work_distance.distance)

    return RepetitionMetrics(
        sets=sets,
        reps_per_set=reps_per_set,
        work_distance_meters=work_distance,
        recovery_distance_meters=recovery_distance,
        between_set_recovery_distance_meters=between_set,
        ladder_pattern=ladder_pattern,
    )


def build_result(workout_type: WorkoutType, laps, activity: Activity | None = None,
                 settings: ClassificationSettings | None = None) -> WorkoutAnalysisResult:
    """Compute the metrics that describe a workout of the given type.

    Args:
        workout_type: Chosen workout type.
        laps: The laps relevant to the type: the tempo block, the interval
            work laps, or every lap of a repetition session.
        activity: Source of aggregate stats for easy and long runs. Without
            it, or when it has no aggregate distance, those are summed
            from laps.
        settings: Thresholds for repetition lap roles.
    """
    if workout_type is WorkoutType.CONTINUOUS_TEMPO:
        return WorkoutAnalysisResult(
            workout_type, structure="continuous", metrics=tempo_block_metrics(laps))

    if workout_type is WorkoutType.INTERVAL_TEMPO:
        return WorkoutAnalysisResult(
            workout_type, structure="interval", interval_metrics=interval_metrics(laps))

    if workout_type is WorkoutType.VO2MAX:
        return WorkoutAnalysisResult(workout_type, interval_metrics=interval_metrics(laps))

    if workout_type is WorkoutType.REPETITION:
        return WorkoutAnalysisResult(
            workout_type, repetition_metrics=repetition_metrics(laps, settings))

    if activity is not None and activity.distance > 0:
        metrics = run_metrics(activity.distance, activity.moving_time, activity.average_heartrate)
    else:
        metrics = tempo_block_metrics(laps)
        if metrics.average_heartrate is None and activity is not None:
            metrics.average_heartrate = _round_hr(activity.average_heartrate)
    return WorkoutAnalysisResult(workout_type, metrics=metrics)
