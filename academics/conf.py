"""Engine policy settings with defaults.

Values are looked up on ``django.conf.settings`` at call time so that a
deployment (or ``override_settings`` in tests) can replace any of them.
"""
from __future__ import annotations

from decimal import Decimal

from django.conf import settings

DEFAULT_GRADE_POINTS = {
    "A": Decimal("4.0"),
    "A-": Decimal("3.7"),
    "B+": Decimal("3.3"),
    "B": Decimal("3.0"),
    "B-": Decimal("2.7"),
    "C+": Decimal("2.3"),
    "C": Decimal("2.0"),
    "C-": Decimal("1.7"),
    "D+": Decimal("1.3"),
    "D": Decimal("1.0"),
    "F": Decimal("0.0"),
}

# (minimum percentage, letter), highest band first.
DEFAULT_GRADE_SCALE = [
    (Decimal("93"), "A"),
    (Decimal("90"), "A-"),
    (Decimal("87"), "B+"),
    (Decimal("83"), "B"),
    (Decimal("80"), "B-"),
    (Decimal("77"), "C+"),
    (Decimal("73"), "C"),
    (Decimal("70"), "C-"),
    (Decimal("67"), "D+"),
    (Decimal("60"), "D"),
    (Decimal("0"), "F"),
]

# (GPA strictly below, standing), checked in ascending order.
DEFAULT_STANDING_THRESHOLDS = [
    (Decimal("1.00"), "Suspended"),
    (Decimal("2.00"), "Probation"),
]
DEFAULT_STANDING = "Good Standing"

DEFAULT_ATTENDANCE_WEIGHTS = {
    "Present": Decimal("1"),
    "Late": Decimal("0.5"),
    "Excused": Decimal("0"),
    "Absent": Decimal("0"),
}

MISSING_RESULT_POLICIES = ("reject", "zero")


def _get(name, default):
    return getattr(settings, name, default)


def grade_points() -> dict:
    return {letter: Decimal(str(points)) for letter, points in _get("ACADEMICS_GRADE_POINTS", DEFAULT_GRADE_POINTS).items()}


def grade_scale() -> list:
    bands = [(Decimal(str(floor)), letter) for floor, letter in _get("ACADEMICS_GRADE_SCALE", DEFAULT_GRADE_SCALE)]
    return sorted(bands, key=lambda band: band[0], reverse=True)


def passing_grade() -> str:
    return _get("ACADEMICS_PASSING_GRADE", "D")


def standing_thresholds() -> list:
    thresholds = _get("ACADEMICS_STANDING_THRESHOLDS", DEFAULT_STANDING_THRESHOLDS)
    return sorted(((Decimal(str(limit)), standing) for limit, standing in thresholds), key=lambda item: item[0])


def default_standing() -> str:
    return _get("ACADEMICS_DEFAULT_STANDING", DEFAULT_STANDING)


def gpa_statuses() -> tuple:
    return tuple(_get("ACADEMICS_GPA_STATUSES", ("Completed",)))


def attendance_weights() -> dict:
    weights = dict(DEFAULT_ATTENDANCE_WEIGHTS)
    weights.update(_get("ACADEMICS_ATTENDANCE_WEIGHTS", {}))
    return {status: Decimal(str(weight)) for status, weight in weights.items()}


def attendance_counts_excused() -> bool:
    return bool(_get("ACADEMICS_ATTENDANCE_COUNT_EXCUSED", True))


def missing_result_policy() -> str:
    policy = _get("ACADEMICS_MISSING_RESULT_POLICY", "reject")
    if policy not in MISSING_RESULT_POLICIES:
        raise ValueError(f"Unknown ACADEMICS_MISSING_RESULT_POLICY {policy!r}")
    return policy


def store_retry_attempts() -> int:
    return max(1, int(_get("ACADEMICS_STORE_RETRY_ATTEMPTS", 3)))


def store_retry_backoff() -> float:
    return float(_get("ACADEMICS_STORE_RETRY_BACKOFF", 0.05))
