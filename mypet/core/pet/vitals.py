"""Vital attribute bounds.

hunger/cleanliness are stored as "badness" scores (0 = fed/clean, 100 =
starving/filthy); health/happiness/energy are the usual way round.
"""

VITAL_MIN = 0
VITAL_MAX = 100

VITALS: tuple[str, ...] = ("health", "hunger", "happiness", "energy", "cleanliness")


def clamp(value: int, low: int = VITAL_MIN, high: int = VITAL_MAX) -> int:
    """value를 [low, high]로 제한."""
    return max(low, min(high, value))
