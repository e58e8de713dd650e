"""Pytest fixtures: lap/activity builders and recorded workouts."""

import pytest

from runnote.models import Activity, Lap


def _lap(distance, moving_time, speed=None, hr=None, zone=None, max_hr=None) -> Lap:
    if speed is None:
        speed = distance / moving_time if moving_time else 0.0
    return Lap(
        distance=distance,
        moving_time=moving_time,
        average_speed=speed,
        average_heartrate=hr,
        max_heartrate=max_hr,
        pace_zone=zone,
    )


def _activity(laps, **kwargs) -> Activity:
    laps = tuple(laps)
    kwargs.setdefault("distance", sum(lap.distance for lap in laps))
    kwargs.setdefault("moving_time", sum(lap.moving_time for lap in laps))
    return Activity(laps=laps, **kwargs)


@pytest.fixture
def make_lap():
    """Build a Lap; speed defaults to distance / time."""
    return _lap


@pytest.fixture
def make_activity():
    """Build an Activity; aggregate distance/time default to the lap sums."""
    return _activity


@pytest.fixture
def two_set_repetition_laps() -> list[Lap]:
    """Warmup, 8 x 200m, 800m jog, 8 x 200m, cooldown (activity 16445002078)."""
    rows = [
        (2556.63, 946, 2.7),
        (200.0, 44, 4.55), (200.0, 69, 2.9),
        (200.0, 43, 4.65), (200.0, 81, 2.47),
        (200.0, 41, 4.88), (200.0, 70, 2.86),
        (200.0, 42, 4.76), (200.0, 79, 2.53),
        (200.0, 41, 4.88), (200.0, 77, 2.6),
        (200.0, 41, 4.88), (200.0, 77, 2.6),
        (200.0, 40, 5.0), (200.0, 73, 2.74),
        (200.0, 41, 4.88), (200.0, 71, 2.82),
        (800.0, 274, 2.92),
        (200.0, 44, 4.55), (200.0, 75, 2.67),
        (200.0, 41, 4.88), (200.0, 85, 2.35),
        (200.0, 41, 4.88), (200.0, 92, 2.17),
        (200.0, 41, 4.88), (200.0, 75, 2.67),
        (200.0, 42, 4.76), (200.0, 91, 2.2),
        (200.0, 43, 4.65), (200.0, 94, 2.13),
        (200.0, 44, 4.55), (200.0, 69, 2.9),
        (200.0, 44, 4.55), (200.0, 75, 2.67),
        (1522.3, 525, 2.9),
    ]
    return [_lap(d, t, s) for d, t, s in rows]


@pytest.fixture
def ten_by_200_laps() -> list[Lap]:
    """Warmup, 10 x 200m on GPS-drifted laps, cooldown (activity 14971708503)."""
    rows = [
        (3218.61, 1220, 2.64),
        (191.21, 41, 4.66), (208.98, 96, 2.18),
        (192.51, 41, 4.7), (209.12, 106, 1.97),
        (190.59, 40, 4.76), (208.19, 106, 1.96),
        (190.17, 40, 4.75), (209.6, 107, 1.96),
        (192.37, 38, 5.06), (206.82, 143, 1.45),
        (194.58, 38, 5.12), (207.49, 168, 1.24),
        (189.93, 40, 4.75), (210.0, 106, 1.98),
        (189.16, 40, 4.73), (210.67, 104, 2.03),
        (189.65, 41, 4.63), (211.15, 106, 1.99),
        (188.79, 41, 4.6), (196.2, 92, 2.13),
        (4071.85, 1294, 3.15),
    ]
    return [_lap(d, t, s) for d, t, s in rows]


@pytest.fixture
def ladder_laps() -> list[Lap]:
    """(400m, 200m, 200m) three times plus an unfinished fourth (activity 15120301578)."""
    rows = [
        (411.55, 85, 4.84), (384.1, 147, 2.61),
        (205.78, 41, 5.02), (196.96, 84, 2.34),
        (199.77, 41, 4.87), (200.1, 99, 2.02),
        (394.95, 82, 4.82), (404.81, 154, 2.63),
        (203.96, 42, 4.86), (193.12, 82, 2.36),
        (207.76, 42, 4.95), (187.38, 92, 2.04),
        (392.14, 82, 4.78), (404.78, 153, 2.65),
        (202.12, 42, 4.81), (198.06, 82, 2.42),
        (201.02, 42, 4.79), (198.76, 116, 1.71),
        (393.38, 83, 4.74),
    ]
    return [_lap(d, t, s) for d, t, s in rows]


@pytest.fixture
def tempo_activity() -> Activity:
    """Warmup, 5011.28m tempo block over 1238s (3 miles plus a tail), cooldown."""
    laps = [
        _lap(3218.0, 1200, hr=135, zone=2),
        _lap(1609.34, 398, hr=162, zone=3),
        _lap(1609.34, 397, hr=166, zone=3),
        _lap(1609.34, 396, hr=168, zone=4),
        _lap(183.26, 47, hr=169, zone=4),
        _lap(1609.0, 560, hr=140, zone=2),
    ]
    return _activity(laps, id=16230797726, average_heartrate=152, max_heartrate=171)


@pytest.fixture
def easy_long_activity() -> Activity:
    """11 mile run entirely in pace zones 1-2."""
    laps = [_lap(1609.34, 539, hr=130, zone=2 if i % 3 else 1) for i in range(11)]
    return _activity(
        laps,
        distance=17714.6,
        moving_time=5930,
        average_heartrate=130,
        max_heartrate=150,
        max_speed=3.4,
    )


@pytest.fixture
def interval_tempo_activity() -> Activity:
    """3 x 1 mile at threshold with 100m standing rests."""
    laps = [
        _lap(3200.0, 1200, hr=135, zone=2),
        _lap(1609.34, 384, hr=164, zone=4),
        _lap(100.0, 60, hr=150),
        _lap(1609.34, 384, hr=168, zone=4),
        _lap(100.0, 60, hr=152),
        _lap(1609.34, 383, hr=171, zone=4),
        _lap(1609.0, 560, hr=140, zone=2),
    ]
    return _activity(laps, id=15272941640, average_heartrate=150, max_heartrate=176)


@pytest.fixture
def vo2max_activity() -> Activity:
    """5 x 1km in zone 5 with 90m walking rests."""
    laps = [_lap(3200.0, 1200, hr=135, zone=2)]
    for i in range(5):
        laps.append(_lap(1000.0, 200, hr=172, zone=5))
        if i < 4:
            laps.append(_lap(90.0, 60, hr=150))
    laps.append(_lap(1609.0, 560, hr=140, zone=2))
    return _activity(laps, average_heartrate=155, max_heartrate=182)
