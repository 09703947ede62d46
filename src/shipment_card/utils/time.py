"""UTC timestamps for fetch outcomes."""

from datetime import datetime, timezone


def utc_now_z() -> str:
    """Current UTC time, ISO 8601 with a trailing Z."""
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%fZ")
