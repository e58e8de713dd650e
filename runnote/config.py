import os
from dataclasses import dataclass, fields
from pathlib import Path

import yaml

DEFAULT_CONFIG_PATH = Path(__file__).resolve().parent.parent / "config" / "config.yaml"


def _expand(value):
    """Recursively expand ~ and env vars in string values."""
    if isinstance(value, str):
        return os.path.expandvars(os.path.expanduser(value))
    if isinstance(value, dict):
        return {k: _expand(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_expand(v) for v in value]
    return value


def load_config(path=None):
    """Load YAML config, expanding ~ and $ENV_VARS in all string values."""
    path = Path(path) if path else DEFAULT_CONFIG_PATH
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")
    with open(path) as f:
        raw = yaml.safe_load(f) or {}
    return _expand(raw)


@dataclass(frozen=True)
class ClassificationSettings:
    """Thresholds used by lap role and workout type classification.

    Speeds are m/s, distances meters, durations seconds, heart rates bpm.
    """

    # Lap roles
    work_min_speed: float = 4.3
    work_min_distance: float = 180
    work_max_distance: float = 600
    recovery_max_speed: float = 3.5
    recovery_min_distance: float = 150
    recovery_max_distance: float = 600
    set_break_max_distance: float = 2000
    set_break_tail_laps: int = 3
    warmup_min_distance: float = 1000

    # Repetition
    min_repetition_work_laps: int = 6
    rep_speed_differential: float = 1.5

    # Long run
    long_min_distance: float = 16093.44
    long_min_moving_time: float = 5400
    easy_max_pace_zone: int = 2

    # Interval tempo / VO2max
    interval_min_distance: float = 900
    interval_max_distance: float = 1700
    interval_recovery_max_distance: float = 150
    interval_recovery_max_time: float = 90
    min_interval_laps: int = 2
    vo2max_min_pace_zone: int = 5

    # Continuous tempo
    tempo_min_hr: float = 150
    tempo_min_pace_zone: int = 3
    tempo_max_pace_zone: int = 4
    tempo_min_lap_distance: float = 1000
    tempo_min_laps: int = 2
    tempo_min_duration: float = 600
    tempo_max_duration: float = 2400

    # Easy
    easy_min_hr: float = 115
    easy_max_hr: float = 145
    easy_max_lap_hr: float = 165
    easy_max_speed: float = 4.6
    easy_max_lap_speed: float = 4.0
    easy_min_lap_distance: float = 150


def classification_settings(config: dict | None = None) -> ClassificationSettings:
    """Build classification thresholds from the `classification` config section.

    Unknown keys are ignored; missing keys keep their defaults.
    """
    section = (config or {}).get("classification") or {}
    known = {f.name for f in fields(ClassificationSettings)}
    overrides = {k: v for k, v in section.items() if k in known}
    return ClassificationSettings(**overrides)
