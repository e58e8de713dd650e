"""Workout analysis pipeline and the classifier capability interface.

Runs the steps for one activity:
1. Lap roles (warmup / work / recovery / set break / cooldown)
2. Workout type from roles and aggregate stats
3. Type-specific metrics

RuleBasedClassifier is the deterministic implementation. Other
implementations (e.g. one backed by a language model) register under a
name and are chosen by the caller; the rules never call them.
"""

from runnote.analysis.lap_roles import classify_laps
from runnote.analysis.metrics import build_result
from runnote.analysis.workout_type import detect_workout
from runnote.config import ClassificationSettings
from runnote.models import Activity, LapRole, WorkoutAnalysisResult, WorkoutType


class Classifier:
    """Turns one activity into a WorkoutAnalysisResult."""

    name = "base"

    def analyze(self, activity: Activity) -> WorkoutAnalysisResult:
        raise NotImplementedError


class RuleBasedClassifier(Classifier):
    name = "rules"

    def __init__(self, settings: ClassificationSettings | None = None, verbose: bool = False):
        self.settings = settings or ClassificationSettings()
        self.verbose = verbose

    def analyze(self, activity: Activity) -> WorkoutAnalysisResult:
        return analyze_activity(activity, self.settings, verbose=self.verbose)


_CLASSIFIERS = {
    RuleBasedClassifier.name: RuleBasedClassifier,
}


def register_classifier(name: str, factory) -> None:
    """Make a classifier available to get_classifier() under name."""
    _CLASSIFIERS[name] = factory


def available_classifiers() -> list[str]:
    return sorted(_CLASSIFIERS)


def get_classifier(name: str = RuleBasedClassifier.name, **kwargs) -> Classifier:
    """Instantiate a registered classifier.

    Raises:
        KeyError: No classifier registered under name.
    """
    if name not in _CLASSIFIERS:
        raise KeyError(f"Unknown classifier '{name}'. Available: {', '.join(available_classifiers())}")
    return _CLASSIFIERS[name](**kwargs)


def analyze_activity(activity: Activity, settings: ClassificationSettings | None = None,
                     verbose: bool = False) -> WorkoutAnalysisResult:
    """Classify an activity and compute the metrics for its summary.

    Never raises on missing or degenerate laps: those runs come back as
    Easy. Easy and long runs without an aggregate distance are measured
    from their laps, and have no metrics when no lap has a distance either.
    """
    cfg = settings or ClassificationSettings()
    roles = classify_laps(activity.laps, cfg)
    detection = detect_workout(activity, roles, cfg)

    if verbose:
        counts = {}
        for role in roles:
            counts[role.value] = counts.get(role.value, 0) + 1
        detail = ", ".join(f"{n} {role}" for role, n in counts.items() if role != LapRole.UNCLASSIFIED.value)
        print(f"  {len(roles)} laps ({detail or 'no roles'}) -> {detection.type.title}"
              f" [{detection.type.code}]")
        if detection.fallback_reason:
            print(f"    Easy by default: {detection.fallback_reason}")

    if (detection.type in (WorkoutType.EASY, WorkoutType.LONG)
            and activity.distance <= 0 and not detection.laps):
        return WorkoutAnalysisResult(
            detection.type,
            fallback_reason=detection.fallback_reason or "Activity has no distance",
        )

    result = build_result(detection.type, detection.laps, activity, cfg)
    result.fallback_reason = detection.fallback_reason
    return result
