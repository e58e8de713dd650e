"""Label each lap of a run as warmup, work, recovery, set break or cooldown.

Roles come from each lap's own speed, distance and heart rate plus its
position in the lap sequence:

1. Work: fast and short (a track rep).
2. Recovery: slow and short (the jog between reps).
3. Between-set recovery: slow, longer, with work on both sides and away
   from the first lap and the last few laps (those are warmup/cooldown).
4. Warmup/cooldown: slow, long laps before the first or after the last
   work lap.

Anything else stays unclassified and is ignored for set/rep counting.
"""

from runnote.config import ClassificationSettings
from runnote.models import Lap, LapRole


def is_work_lap(lap: Lap, settings: ClassificationSettings) -> bool:
    return (not lap.is_degenerate
            and lap.average_speed > settings.work_min_speed
            and settings.work_min_distance <= lap.distance <= settings.work_max_distance)


def is_recovery_lap(lap: Lap, settings: ClassificationSettings) -> bool:
    return (not lap.is_degenerate
            and lap.average_speed < settings.recovery_max_speed
            and settings.recovery_min_distance <= lap.distance <= settings.recovery_max_distance)


def _is_set_break_candidate(lap: Lap, settings: ClassificationSettings) -> bool:
    return (not lap.is_degenerate
            and lap.average_speed < settings.recovery_max_speed
            and settings.recovery_max_distance < lap.distance <= settings.set_break_max_distance)


def _is_warmup_like(lap: Lap, settings: ClassificationSettings) -> bool:
    """Slow, long lap at easy effort."""
    if lap.is_degenerate:
        return False
    if lap.distance <= settings.warmup_min_distance:
        return False
    if lap.average_speed >= settings.recovery_max_speed:
        return False
    hr = lap.average_heartrate
    return hr is None or hr < settings.tempo_min_hr


def classify_laps(laps, settings: ClassificationSettings | None = None) -> list[LapRole]:
    """Assign one role to every lap, index-aligned with the input.

    Args:
        laps: Laps in temporal order.
        settings: Thresholds; defaults if None.

    Returns:
        List of LapRole, same length as laps (empty for no laps).
    """
    cfg = settings or ClassificationSettings()
    laps = list(laps)
    n = len(laps)
    roles = [LapRole.UNCLASSIFIED] * n

    # Step 1: Work laps, needed before set breaks can be placed
    work_idx = [i for i, lap in enumerate(laps) if is_work_lap(lap, cfg)]
    for i in work_idx:
        roles[i] = LapRole.WORK

    # Step 2: Recoveries and set breaks
    for i, lap in enumerate(laps):
        if roles[i] is LapRole.WORK:
            continue
        if is_recovery_lap(lap, cfg):
            roles[i] = LapRole.RECOVERY
        elif (_is_set_break_candidate(lap, cfg)
              and 0 < i < n - cfg.set_break_tail_laps
              and any(w < i for w in work_idx)
              and any(w > i for w in work_idx)):
            roles[i] = LapRole.BETWEEN_SET_RECOVERY

    # Step 3: Warmup before first work, cooldown after last work
    if work_idx:
        first_work, last_work = work_idx[0], work_idx[-1]
        for i, lap in enumerate(laps):
            if roles[i] is not LapRole.UNCLASSIFIED or not _is_warmup_like(lap, cfg):
                continue
            if i < first_work:
                roles[i] = LapRole.WARMUP
            elif i > last_work:
                roles[i] = LapRole.COOLDOWN
    elif n:
        # No work at all: only the boundary laps can be warmup/cooldown
        if roles[0] is LapRole.UNCLASSIFIED and _is_warmup_like(laps[0], cfg):
            roles[0] = LapRole.WARMUP
        if n > 1 and roles[-1] is LapRole.UNCLASSIFIED and _is_warmup_like(laps[-1], cfg):
            roles[-1] = LapRole.COOLDOWN

    return roles


def laps_with_role(laps, roles: list[LapRole], role: LapRole) -> list[Lap]:
    """Laps carrying the given role, in their original order."""
    return [lap for lap, r in zip(laps, roles) if r is role]
