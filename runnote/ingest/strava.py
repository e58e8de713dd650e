"""Strava activity records: parse them into Activity and write summaries back.

Parsing accepts either raw API JSON (dicts, e.g. a saved activity file) or
stravalib model objects. Missing numbers become 0 / None rather than errors
so that bad records still classify (as Easy).
"""

import json
import math
import time as time_mod
from pathlib import Path

from stravalib import Client

from runnote.errors import InvalidInputError
from runnote.models import Activity, ActivityUpdate, Lap


def _get(record, name):
    if isinstance(record, dict):
        return record.get(name)
    return getattr(record, name, None)


def _num(record, name) -> float:
    value = _opt_num(record, name)
    return 0.0 if value is None else value


def _opt_num(record, name) -> float | None:
    """Finite float, or None for missing, non-numeric, NaN and infinite values."""
    value = _get(record, name)
    if value is None:
        return None
    try:
        value = float(value)
    except (TypeError, ValueError):
        return None
    return value if math.isfinite(value) else None


def _seconds(record, name) -> float:
    """Durations come as numbers in JSON and as timedelta-like values from stravalib."""
    value = _get(record, name)
    if value is None:
        return 0.0
    if hasattr(value, "total_seconds"):
        return float(value.total_seconds())
    seconds = _opt_num(record, name)
    return float(int(seconds)) if seconds is not None else 0.0


def lap_from_record(record) -> Lap:
    """Build a Lap from a Strava lap (dict or stravalib Lap)."""
    if record is None:
        raise InvalidInputError("Lap record is empty")

    distance = _num(record, "distance")
    moving_time = _seconds(record, "moving_time")
    speed = _opt_num(record, "average_speed")
    if speed is None:
        speed = distance / moving_time if moving_time > 0 else 0.0

    zone = _opt_num(record, "pace_zone")
    return Lap(
        distance=distance,
        moving_time=moving_time,
        average_speed=speed,
        average_heartrate=_opt_num(record, "average_heartrate"),
        max_heartrate=_opt_num(record, "max_heartrate"),
        pace_zone=int(zone) if zone is not None else None,
    )


def activity_from_record(record, laps=None) -> Activity:
    """Build an Activity from a Strava activity (dict or stravalib model).

    Args:
        record: Activity JSON dict or stravalib activity.
        laps: Lap records fetched separately; defaults to record's own laps.

    Raises:
        InvalidInputError: record is None or not an activity-like object.
    """
    if record is None or isinstance(record, (str, bytes, int, float, list)):
        raise InvalidInputError(f"Not an activity record: {type(record).__name__}")

    if laps is None:
        laps = _get(record, "laps") or []

    activity_id = _opt_num(record, "id")
    return Activity(
        laps=tuple(lap_from_record(lap) for lap in laps),
        distance=_num(record, "distance"),
        moving_time=_seconds(record, "moving_time"),
        average_heartrate=_opt_num(record, "average_heartrate"),
        max_heartrate=_opt_num(record, "max_heartrate"),
        average_speed=_opt_num(record, "average_speed"),
        max_speed=_opt_num(record, "max_speed"),
        id=int(activity_id) if activity_id is not None else None,
        name=_get(record, "name"),
        description=_get(record, "description"),
    )


def load_activity_file(path) -> Activity:
    """Read a saved Strava activity JSON file."""
    path = Path(path)
    with open(path) as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise InvalidInputError(f"{path}: expected a JSON object, got {type(data).__name__}")
    return activity_from_record(data)


# ---------------------------------------------------------------------------
# Token management
# ---------------------------------------------------------------------------

_TOKEN_KEYS = ("access_token", "refresh_token", "expires_at")


def _load_tokens(config: dict) -> dict:
    """Load tokens from disk."""
    token_path = Path(config["strava"]["token_file"]).expanduser()
    if not token_path.exists():
        raise FileNotFoundError(
            f"Strava tokens not found at {token_path} (strava.token_file in config.yaml). "
            f"Authorize RunNote with Strava (activity:read_all,activity:write) and save the token "
            f"response there, see config/config.example.yaml."
        )
    with open(token_path) as f:
        return json.load(f)


def _save_tokens(config: dict, tokens: dict):
    """Save tokens to disk."""
    token_path = Path(config["strava"]["token_file"]).expanduser()
    token_path.parent.mkdir(parents=True, exist_ok=True)
    with open(token_path, "w") as f:
        json.dump(tokens, f, indent=2)


def get_client(config: dict) -> Client:
    """Create an authenticated stravalib Client, refreshing tokens if needed."""
    tokens = _load_tokens(config)

    # Refresh if expired or expiring within 60s
    if tokens["expires_at"] < time_mod.time() + 60:
        client = Client()
        new_tokens = client.refresh_access_token(
            client_id=int(config["strava"]["client_id"]),
            client_secret=config["strava"]["client_secret"],
            refresh_token=tokens["refresh_token"],
        )
        tokens = {key: new_tokens[key] for key in _TOKEN_KEYS}
        _save_tokens(config, tokens)

    return Client(access_token=tokens["access_token"])


# ---------------------------------------------------------------------------
# Fetch / update
# ---------------------------------------------------------------------------

def fetch_activity(client: Client, activity_id: int) -> Activity:
    """Fetch an activity and its laps from Strava."""
    strava_act = client.get_activity(int(activity_id))
    laps = list(client.get_activity_laps(int(activity_id)))
    return activity_from_record(strava_act, laps)


def push_update(client: Client, activity_id: int, update: ActivityUpdate) -> None:
    """Write the title and description back to Strava."""
    client.update_activity(int(activity_id), name=update.name, description=update.description)
