"""Pick one workout type for an activity from its laps and aggregate stats.

Rules run top to bottom and the first match wins:

1. Repetition: many short fast reps alternating with slow jogs. Checked
   first because the averages of an R session look like an easy run.
2. Long: distance or moving time over the long-run threshold.
3. Interval tempo / VO2max: 900-1700m reps at threshold HR with short rests.
4. Continuous tempo: a 10-40 minute block of contiguous hard laps.
5. Easy: everything else. Flagged with a reason when the laps don't
   actually look easy, so a caller can route it to another classifier.
"""

from dataclasses import dataclass, field

from runnote.analysis.lap_roles import classify_laps
from runnote.config import ClassificationSettings
from runnote.models import Activity, Lap, LapRole, WorkoutType

_RECOVERY_ROLES = {LapRole.RECOVERY, LapRole.BETWEEN_SET_RECOVERY}


@dataclass
class WorkoutDetection:
    type: WorkoutType
    laps: list[Lap] = field(default_factory=list)
    structure: str | None = None
    fallback_reason: str | None = None


@dataclass
class PreDetection:
    is_easy_run: bool
    confidence: float
    reason: str


def classify_workout(activity: Activity, roles: list[LapRole] | None = None,
                     settings: ClassificationSettings | None = None) -> WorkoutType:
    """Return the single workout type for an activity."""
    return detect_workout(activity, roles, settings).type


def detect_workout(activity: Activity, roles: list[LapRole] | None = None,
                   settings: ClassificationSettings | None = None) -> WorkoutDetection:
    """Classify an activity and keep the laps its metrics should be computed from.

    Args:
        activity: The run, laps in temporal order.
        roles: Lap roles from classify_laps(); computed if None.
        settings: Thresholds; defaults if None.

    Returns:
        WorkoutDetection. Activities without usable laps come back as Easy,
        to be described from aggregate stats only.
    """
    cfg = settings or ClassificationSettings()
    laps = list(activity.laps)
    if roles is None:
        roles = classify_laps(laps, cfg)
    if len(roles) != len(laps):
        raise ValueError(f"Got {len(roles)} roles for {len(laps)} laps")

    usable = [lap for lap in laps if not lap.is_degenerate]
    if not usable:
        return WorkoutDetection(
            WorkoutType.EASY,
            fallback_reason="No usable laps; classified from aggregate stats",
        )

    if _is_repetition(laps, roles, cfg):
        return WorkoutDetection(WorkoutType.REPETITION, laps=laps)

    if _is_long(activity, usable, cfg):
        return WorkoutDetection(WorkoutType.LONG, laps=usable)

    work = find_interval_laps(laps, cfg)
    if work:
        zones = [lap.pace_zone for lap in work]
        if all(z is not None and z >= cfg.vo2max_min_pace_zone for z in zones):
            return WorkoutDetection(WorkoutType.VO2MAX, laps=work, structure="interval")
        return WorkoutDetection(WorkoutType.INTERVAL_TEMPO, laps=work, structure="interval")

    block = find_tempo_block(laps, cfg)
    if block:
        return WorkoutDetection(WorkoutType.CONTINUOUS_TEMPO, laps=block, structure="continuous")

    pre = pre_detect_easy_run(activity, cfg)
    return WorkoutDetection(
        WorkoutType.EASY,
        laps=usable,
        fallback_reason=None if pre.is_easy_run else pre.reason,
    )


def _is_repetition(laps: list[Lap], roles: list[LapRole], cfg: ClassificationSettings) -> bool:
    """Enough work reps sitting next to a clearly slower recovery jog."""
    interleaved = 0
    for i, role in enumerate(roles):
        if role is not LapRole.WORK:
            continue
        for j in (i - 1, i + 1):
            if not 0 <= j < len(laps) or roles[j] not in _RECOVERY_ROLES:
                continue
            if abs(laps[i].average_speed - laps[j].average_speed) > cfg.rep_speed_differential:
                interleaved += 1
                break
    return interleaved >= cfg.min_repetition_work_laps


def _is_long(activity: Activity, usable: list[Lap], cfg: ClassificationSettings) -> bool:
    if (activity.distance < cfg.long_min_distance
            and activity.moving_time < cfg.long_min_moving_time):
        return False
    # Every lap zoned and all of them easy: describe it as an easy run
    zones = [lap.pace_zone for lap in usable]
    if all(z is not None for z in zones) and max(zones) <= cfg.easy_max_pace_zone:
        return False
    return True


def _zone_at_least(lap: Lap, zone: int) -> bool:
    return lap.pace_zone is None or lap.pace_zone >= zone


def _zone_in_tempo_range(lap: Lap, cfg: ClassificationSettings) -> bool:
    return lap.pace_zone is None or cfg.tempo_min_pace_zone <= lap.pace_zone <= cfg.tempo_max_pace_zone


def _at_tempo_hr(lap: Lap, cfg: ClassificationSettings) -> bool:
    return lap.average_heartrate is not None and lap.average_heartrate >= cfg.tempo_min_hr


def find_interval_laps(laps, settings: ClassificationSettings | None = None) -> list[Lap]:
    """Longest run of interval work laps separated only by short rests.

    Returns:
        The work laps (without rests), or [] if fewer than the minimum.
    """
    cfg = settings or ClassificationSettings()

    def is_work(lap: Lap) -> bool:
        return (not lap.is_degenerate
                and cfg.interval_min_distance <= lap.distance <= cfg.interval_max_distance
                and _at_tempo_hr(lap, cfg)
                and _zone_at_least(lap, cfg.tempo_min_pace_zone))

    def is_short_rest(lap: Lap) -> bool:
        return (lap.distance < cfg.interval_recovery_max_distance
                or lap.moving_time < cfg.interval_recovery_max_time)

    best: list[Lap] = []
    current: list[Lap] = []
    rests = 0
    for lap in laps:
        if is_work(lap):
            if current and rests == 0:
                # Back-to-back work laps are a continuous block, start over
                current = [lap]
            else:
                current.append(lap)
            rests = 0
        elif current and is_short_rest(lap):
            rests += 1
        else:
            current = []
            rests = 0
        if len(current) > len(best):
            best = list(current)

    return best if len(best) >= cfg.min_interval_laps else []


def find_tempo_block(laps, settings: ClassificationSettings | None = None) -> list[Lap]:
    """Longest contiguous block of tempo laps lasting 10-40 minutes.

    A block is at least two laps over the tempo lap distance at tempo HR and
    zone. One shorter lap of the same effort directly after the block (the
    remainder of the last mile) is included when the duration allows.
    """
    cfg = settings or ClassificationSettings()

    def same_effort(lap: Lap) -> bool:
        return not lap.is_degenerate and _at_tempo_hr(lap, cfg) and _zone_in_tempo_range(lap, cfg)

    def duration(block: list[Lap]) -> float:
        return sum(lap.moving_time for lap in block)

    def in_window(block: list[Lap]) -> bool:
        return cfg.tempo_min_duration <= duration(block) <= cfg.tempo_max_duration

    best: list[Lap] = []
    i = 0
    n = len(laps)
    while i < n:
        if not (same_effort(laps[i]) and laps[i].distance > cfg.tempo_min_lap_distance):
            i += 1
            continue
        j = i
        while j < n and same_effort(laps[j]) and laps[j].distance > cfg.tempo_min_lap_distance:
            j += 1
        run = list(laps[i:j])
        if len(run) >= cfg.tempo_min_laps:
            candidates = []
            if j < n and same_effort(laps[j]):
                candidates.append(run + [laps[j]])
            candidates.append(run)
            for block in candidates:
                if in_window(block):
                    if duration(block) > duration(best):
                        best = block
                    break
        i = j

    return best


def pre_detect_easy_run(activity: Activity,
                        settings: ClassificationSettings | None = None) -> PreDetection:
    """Cheap check for an obviously easy run.

    Any sign of structured effort (high max HR or speed, very short laps,
    fast laps, big lap-to-lap speed swings, HR outside the easy band) makes
    this return is_easy_run=False with the reason.
    """
    cfg = settings or ClassificationSettings()
    laps = [lap for lap in activity.laps if not lap.is_degenerate]

    if not laps:
        return PreDetection(False, 0.0, "No laps data available")

    if activity.max_heartrate and activity.max_heartrate > cfg.easy_max_lap_hr:
        return PreDetection(
            False, 0.95,
            f"High max HR ({activity.max_heartrate:.0f} bpm) indicates workout intensity",
        )

    if activity.max_speed and activity.max_speed > cfg.easy_max_speed:
        return PreDetection(
            False, 0.9,
            f"High max speed ({activity.max_speed:.2f} m/s) indicates workout intervals",
        )

    if any(lap.distance < cfg.easy_min_lap_distance for lap in laps):
        return PreDetection(False, 0.9, "Short recovery laps detected (interval workout pattern)")

    if any(lap.average_speed > cfg.easy_max_lap_speed for lap in laps):
        return PreDetection(False, 0.85, "High-speed work intervals detected")

    differential = max_speed_differential(laps)
    if differential > cfg.rep_speed_differential:
        return PreDetection(
            False, 0.85,
            f"Large pace variations between laps ({differential:.2f} m/s differential)",
        )

    if not _hr_mostly_easy(activity, laps, cfg):
        return PreDetection(
            False, 0.7,
            f"Heart rate mostly outside {cfg.easy_min_hr:.0f}-{cfg.easy_max_hr:.0f} bpm",
        )

    return PreDetection(True, 0.9, "Consistent pace, moderate HR, no interval patterns detected")


def max_speed_differential(laps) -> float:
    """Largest speed change between consecutive laps (m/s)."""
    laps = list(laps)
    diffs = [
        abs(curr.average_speed - prev.average_speed)
        for prev, curr in zip(laps, laps[1:])
        if prev.average_speed and curr.average_speed
    ]
    return max(diffs, default=0.0)


def _hr_mostly_easy(activity: Activity, laps: list[Lap], cfg: ClassificationSettings) -> bool:
    """More than half the laps (or the whole run) within the easy HR band."""
    lap_hrs = [lap.average_heartrate for lap in laps if lap.average_heartrate is not None]
    if lap_hrs:
        easy = sum(1 for hr in lap_hrs if cfg.easy_min_hr <= hr <= cfg.easy_max_hr)
        return easy / len(lap_hrs) > 0.5
    hr = activity.average_heartrate
    return hr is not None and cfg.easy_min_hr <= hr <= cfg.easy_max_hr
