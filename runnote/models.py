from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Optional, Union


class LapRole(str, Enum):
    WARMUP = "warmup"
    WORK = "work"
    RECOVERY = "recovery"
    BETWEEN_SET_RECOVERY = "between_set_recovery"
    COOLDOWN = "cooldown"
    UNCLASSIFIED = "unclassified"


class WorkoutType(str, Enum):
    LONG = "long"
    EASY = "easy"
    CONTINUOUS_TEMPO = "continuous_tempo"
    INTERVAL_TEMPO = "interval_tempo"
    VO2MAX = "vo2max"
    REPETITION = "repetition"

    @property
    def code(self) -> str:
        """One-letter code used at the start of a summary line."""
        return _TYPE_CODES[self]

    @property
    def title(self) -> str:
        return _TYPE_TITLES[self]


_TYPE_CODES = {
    WorkoutType.LONG: "L",
    WorkoutType.EASY: "E",
    WorkoutType.CONTINUOUS_TEMPO: "T",
    WorkoutType.INTERVAL_TEMPO: "T",
    WorkoutType.VO2MAX: "V",
    WorkoutType.REPETITION: "R",
}

_TYPE_TITLES = {
    WorkoutType.LONG: "Long Run",
    WorkoutType.EASY: "Easy Run",
    WorkoutType.CONTINUOUS_TEMPO: "Tempo Run",
    WorkoutType.INTERVAL_TEMPO: "Tempo Run",
    WorkoutType.VO2MAX: "VO2max Intervals",
    WorkoutType.REPETITION: "Repetition Run",
}


@dataclass(frozen=True)
class Lap:
    distance: float = 0.0
    moving_time: float = 0.0
    average_speed: float = 0.0
    average_heartrate: Optional[float] = None
    max_heartrate: Optional[float] = None
    pace_zone: Optional[int] = None

    @property
    def is_degenerate(self) -> bool:
        return self.distance <= 0 or self.moving_time <= 0


@dataclass(frozen=True)
class Activity:
    laps: tuple[Lap, ...] = ()
    distance: float = 0.0
    moving_time: float = 0.0
    average_heartrate: Optional[float] = None
    max_heartrate: Optional[float] = None
    average_speed: Optional[float] = None
    max_speed: Optional[float] = None
    id: Optional[int] = None
    name: Optional[str] = None
    description: Optional[str] = None


@dataclass(frozen=True)
class RepeatingPattern:
    pattern: tuple
    sets: int


@dataclass(frozen=True)
class Uniform:
    distance: int


@dataclass(frozen=True)
class Ladder:
    sequence: tuple[int, ...]


# Work and recovery distances are either one distance for every rep or a
# repeating sequence of distances.
RepDistance = Union[Uniform, Ladder]


@dataclass
class RunMetrics:
    distance_miles: float
    pace_seconds_per_mile: float
    average_heartrate: Optional[int] = None


@dataclass
class IntervalMetrics:
    interval_count: int
    distance_per_interval_miles: float
    individual_paces_seconds: list[float] = field(default_factory=list)
    average_heartrate: Optional[int] = None


@dataclass
class RepetitionMetrics:
    sets: int
    reps_per_set: int
    work_distance_meters: RepDistance
    recovery_distance_meters: RepDistance
    between_set_recovery_distance_meters: int = 0
    ladder_pattern: Optional[tuple[int, ...]] = None


@dataclass
class WorkoutAnalysisResult:
    type: WorkoutType
    structure: Optional[str] = None
    metrics: Optional[RunMetrics] = None
    interval_metrics: Optional[IntervalMetrics] = None
    repetition_metrics: Optional[RepetitionMetrics] = None
    fallback_reason: Optional[str] = None

    def to_dict(self) -> dict:
        """Plain-JSON view; tagged distances keep their variant name."""
        out = {
            "type": self.type.value,
            "structure": self.structure,
            "metrics": asdict(self.metrics) if self.metrics else None,
            "interval_metrics": asdict(self.interval_metrics) if self.interval_metrics else None,
            "repetition_metrics": None,
            "fallback_reason": self.fallback_reason,
        }
        rep = self.repetition_metrics
        if rep:
            out["repetition_metrics"] = {
                "sets": rep.sets,
                "reps_per_set": rep.reps_per_set,
                "work_distance_meters": _distance_to_dict(rep.work_distance_meters),
                "recovery_distance_meters": _distance_to_dict(rep.recovery_distance_meters),
                "between_set_recovery_distance_meters": rep.between_set_recovery_distance_meters,
                "ladder_pattern": list(rep.ladder_pattern) if rep.ladder_pattern else None,
            }
        return out


def _distance_to_dict(value: RepDistance) -> dict:
    if isinstance(value, Ladder):
        return {"ladder": list(value.sequence)}
    return {"uniform": value.distance}


@dataclass
class ActivityUpdate:
    name: str
    description: str
